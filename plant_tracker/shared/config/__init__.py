# 📄 File: plant_tracker/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Holds the settings that tell Plant Tracker where to store gardens, which AI
# service to call and how to behave.
#
# 🧪 Purpose (Technical Summary):
# Configuration package exporting the settings model/factory and the Supabase
# client manager.
#
# 🔄 Connected Modules / Calls From:
# - plant_tracker.main (application startup)
# - Infrastructure adapters

"""
Configuration Management Package

Handles all application configuration including:
- Environment-based settings
- External API credentials and settings
- Supabase integration settings
"""

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
