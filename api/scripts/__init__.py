"""Maintenance scripts (migrations, sample data)."""
