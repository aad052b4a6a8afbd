# 📄 File: plant_tracker/shared/infrastructure/external_apis/__init__.py

# 🧭 Purpose (Layman Explanation):
# The toolbox for talking to third-party services, currently the AI botanist.

# 🧪 Purpose (Technical Summary):
# Re-exports the generic retrying HTTP client and its factory.

# 🔗 Dependencies:
# - api_client: Generic HTTP client with retry logic

# 🔄 Connected Modules / Calls From:
# Used by: OpenRouter plant assistant

from .api_client import APIClient, create_api_client

__all__ = ["APIClient", "create_api_client"]
