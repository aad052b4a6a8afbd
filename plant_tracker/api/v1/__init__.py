# 📄 File: plant_tracker/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the Plant Tracker web API, kept separate so later versions can be added
# without breaking existing apps.
# 🧪 Purpose (Technical Summary):
# Package initialization for API v1 with version metadata and route prefixes.
# 🔗 Dependencies:
# None
# 🔄 Connected Modules / Calls From:
# plant_tracker.api.v1.router, plant_tracker.main

from typing import Any, Dict

__api_version__ = "v1"

ROUTE_PREFIXES = {
    "garden": "/garden",
}

API_TAGS = {
    "garden": "Garden",
    "health": "Health Check",
}


def get_api_info() -> Dict[str, Any]:
    from plant_tracker import __version__

    return {
        "api_version": __api_version__,
        "version": __version__,
        "modules": sorted(ROUTE_PREFIXES),
    }
