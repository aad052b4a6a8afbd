from .garden_repository import GardenRepository

__all__ = ["GardenRepository"]
