"""Classifieds marketplace backend."""
