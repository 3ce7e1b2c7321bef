"""Service layer for the classifieds application."""
