"""Shared infrastructure: clients for services outside the process."""
