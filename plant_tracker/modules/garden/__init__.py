# 📄 File: plant_tracker/modules/garden/__init__.py
# 🧭 Purpose (Layman Explanation):
# The garden feature: a gardener's plants, their care reminders and calendar, care plans,
# diary, points, badges and the AI botanist.
# 🧪 Purpose (Technical Summary):
# Package initialization for the garden module, laid out in domain / application /
# infrastructure / presentation layers.
# 🔗 Dependencies:
# FastAPI, pydantic, supabase, aiohttp, tenacity
# 🔄 Connected Modules / Calls From:
# plant_tracker.main, plant_tracker.api.v1.router

"""
Garden Module

Architecture follows Domain-Driven Design:
- Domain: models, pure engines (schedule, care plan, achievements, gamification)
  and the repository / assistant contracts
- Application: GardenStore (state), GardenService (persistence + AI), session manager
- Infrastructure: Supabase and in-memory repositories, OpenRouter assistant
- Presentation: API endpoints and request/response schemas
"""

__version__ = "1.0.0"
__module_name__ = "garden"
__description__ = "Plant care tracking and gamification"

GARDEN_CONFIG = {
    "version": __version__,
    "module_name": __module_name__,
    "description": __description__,
    "features": {
        "care_alerts": True,
        "care_calendar": True,
        "care_plans": True,
        "achievements": True,
        "ai_assistant": True,
    },
    "points": {
        "complete_task": 10,
        "add_plant": 50,
        "add_history": 15,
        "activate_plan": 25,
    },
}
