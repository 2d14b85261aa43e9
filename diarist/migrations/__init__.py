"""Alembic migration scripts for the Diarist schema."""
