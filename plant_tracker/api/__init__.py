"""Plant Tracker HTTP API package."""
