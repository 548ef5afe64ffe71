# db_models/__init__.py
# Import models so they are registered on Base.metadata
from db_models.asset import Asset
from db_models.component import Component

__all__ = ["Asset", "Component"]
