"""Core cross-cutting definitions: the application exception hierarchy."""
