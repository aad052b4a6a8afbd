"""Shared utilities: structured logging and date arithmetic."""
