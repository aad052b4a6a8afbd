"""Garden HTTP API: versioned routers and request/response schemas."""
