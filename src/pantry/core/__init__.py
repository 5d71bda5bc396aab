"""Core configuration and logging for Pantry."""
