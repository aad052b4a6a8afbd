"""Garden presentation layer: FastAPI routers, schemas and dependencies."""
