"""Core models for cryptoplug."""
