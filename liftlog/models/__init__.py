"""Database models and API schemas."""
