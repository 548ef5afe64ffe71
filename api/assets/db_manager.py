# api/assets/db_manager.py
"""
Business logic for asset management.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from api.records import DeleteOutcome, purge_files, record_columns
from core.entities import AssetRecord, ComponentRecord, generate_id
from core.errors import NotFoundError
from core.validation import validate_asset
from db_models.asset import Asset
from storage.base import BaseStorageDriver
from . import queries

logger = logging.getLogger(__name__)


class AssetNotFoundError(NotFoundError):
    """Raised when asset doesn't exist."""
    pass


async def list_assets(db: AsyncSession) -> list[Asset]:
    """Return all assets."""
    result = await db.execute(queries.select_all_assets())
    return list(result.scalars().all())


async def get_asset_by_id(db: AsyncSession, asset_id: str) -> Asset:
    """Get an asset by ID. Raises AssetNotFoundError if not found."""
    result = await db.execute(queries.select_asset_by_id(asset_id))
    asset = result.scalar_one_or_none()
    if asset is None:
        raise AssetNotFoundError(f"Asset {asset_id} not found")
    return asset


async def upsert_asset(db: AsyncSession, payload: AssetRecord) -> Asset:
    """
    Create an asset, or replace the stored one with the same ID.

    The creation time of an existing asset is always kept; every save sets
    a fresh update time.

    Raises:
        ValidationError: If the name is missing
    """
    validate_asset(payload)

    asset_id = payload.id or generate_id()
    values = record_columns(payload)
    now = datetime.now(timezone.utc)

    result = await db.execute(queries.select_asset_by_id(asset_id))
    asset = result.scalar_one_or_none()
    if asset is None:
        asset = Asset(id=asset_id, created_at=now, updated_at=now, **values)
        db.add(asset)
        action = "added"
    else:
        for key, value in values.items():
            setattr(asset, key, value)
        asset.updated_at = now
        action = "edited"

    await db.commit()
    await db.refresh(asset)
    logger.debug("Asset %s: id=%s name=%r", action, asset.id, asset.name)
    return asset


async def delete_asset(
    db: AsyncSession,
    storage: BaseStorageDriver,
    asset_id: str,
) -> DeleteOutcome:
    """
    Delete an asset together with its first-level components.

    Components nested under those first-level components are not touched.
    A missing asset is a successful no-op. Stored files of every deleted
    record are removed afterwards; file failures are reported, not raised.
    """
    outcome = DeleteOutcome(root_id=asset_id)

    result = await db.execute(queries.select_asset_by_id(asset_id))
    asset = result.scalar_one_or_none()
    if asset is None:
        outcome.found = False
        return outcome

    result = await db.execute(queries.select_first_level_components(asset_id))
    components = list(result.scalars().all())

    records = [AssetRecord.model_validate(asset)]
    records.extend(ComponentRecord.model_validate(c) for c in components)

    for component in components:
        await db.delete(component)
    await db.delete(asset)
    await db.commit()

    outcome.deleted_ids = [r.id for r in records]
    outcome.file_failures = await purge_files(storage, records)
    logger.debug(
        "Asset deleted: id=%s with %d component(s)", asset_id, len(components)
    )
    return outcome
