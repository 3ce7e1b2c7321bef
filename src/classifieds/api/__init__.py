"""HTTP API for the classifieds application."""
