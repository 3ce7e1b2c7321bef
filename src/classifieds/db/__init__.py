# src/classifieds/db/__init__.py
"""Database configuration and utilities."""

from .session import SessionLocal, database_ready, get_db

__all__ = ["get_db", "SessionLocal", "database_ready"]
