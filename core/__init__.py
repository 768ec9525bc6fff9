"""CSV visualizer Django app."""
