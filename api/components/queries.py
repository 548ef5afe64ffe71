# api/components/queries.py
"""
SQLAlchemy query builders for component operations.
"""
from sqlalchemy import select

from db_models.asset import Asset
from db_models.component import Component


def select_component_by_id(component_id: str):
    """Select a component by its ID."""
    return select(Component).where(Component.id == component_id)


def select_all_components():
    """Select all components, oldest first."""
    return select(Component).order_by(Component.created_at, Component.id)


def select_components_for_asset(asset_id: str):
    """Select every component owned by an asset, at any depth."""
    return select(Component).where(Component.parent_id == asset_id)


def select_components_by_ids(component_ids):
    return select(Component).where(Component.id.in_(list(component_ids)))


def select_asset_id(asset_id: str):
    """Select an asset's ID, to check that it exists."""
    return select(Asset.id).where(Asset.id == asset_id)
