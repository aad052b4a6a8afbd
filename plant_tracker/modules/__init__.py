"""Feature modules of the Plant Tracker application."""
