"""Raw-text parsers for uploaded files."""
