# 📄 File: plant_tracker/modules/garden/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Works out whose garden a request is about and opens that garden for the endpoint.
# 🧪 Purpose (Technical Summary):
# FastAPI dependencies resolving the opaque X-User-Key header into the caller's
# GardenService through the GardenSessionManager kept on app.state.
# 🔗 Dependencies:
# FastAPI, GardenSessionManager, shared exceptions
# 🔄 Connected Modules / Calls From:
# plant_tracker.modules.garden.presentation.api.v1.garden (every garden endpoint)

from fastapi import Depends, Header, Request

from plant_tracker.shared.core.exceptions import AuthenticationError
from ..application.garden_service import GardenService
from ..application.session_manager import GardenSessionManager

USER_KEY_HEADER = "X-User-Key"


def get_session_manager(request: Request) -> GardenSessionManager:
    return request.app.state.garden_sessions


async def get_user_key(x_user_key: str = Header(default="", alias=USER_KEY_HEADER)) -> str:
    """
    Read the caller's opaque user key.

    Identity is established upstream; the key only selects the garden.
    """
    user_key = x_user_key.strip()
    if not user_key:
        raise AuthenticationError(f"{USER_KEY_HEADER} header is required")
    return user_key


async def get_garden(
    user_key: str = Depends(get_user_key),
    sessions: GardenSessionManager = Depends(get_session_manager),
) -> GardenService:
    return await sessions.get(user_key)
