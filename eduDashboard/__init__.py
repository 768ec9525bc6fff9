"""Django project package for eduDashboard."""
