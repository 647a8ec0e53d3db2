"""Core models shared across mapattrs."""
