"""Serialization and routine persistence."""
