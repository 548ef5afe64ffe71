# api/assets/queries.py
"""
SQLAlchemy query builders for asset operations.
"""
from sqlalchemy import select

from db_models.asset import Asset
from db_models.component import Component


def select_asset_by_id(asset_id: str):
    """Select an asset by its ID."""
    return select(Asset).where(Asset.id == asset_id)


def select_all_assets():
    """Select all assets, oldest first."""
    return select(Asset).order_by(Asset.created_at, Asset.id)


def select_first_level_components(asset_id: str):
    """Select the components attached directly to an asset."""
    return (
        select(Component)
        .where(Component.parent_id == asset_id)
        .where(Component.parent_sub_id.is_(None))
    )
