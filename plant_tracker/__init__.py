# 📄 File: plant_tracker/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this folder holds the Plant Tracker application and records
# the basic version and package information.
#
# 🧪 Purpose (Technical Summary):
# Package initialization with version info and metadata for the Plant Tracker
# FastAPI application.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)
# - shared.config.settings (default version string)

"""
Plant Tracker - AI-Assisted Plant Care Tracking

A backend API for tracking a personal plant collection: AI identification,
recurring care schedules, guided care plans, a diary per plant and gamified
progress with growth points, levels and achievements.
"""

__version__ = "1.0.0"
__title__ = "Plant Tracker API"
__description__ = "AI-Assisted Plant Care Tracking"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
    "__license__",
]
