# api/components/db_manager.py
"""
Business logic for component management.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from api.records import DeleteOutcome, purge_files, record_columns
from core.descendants import CascadePlan, DescendantResolver
from core.entities import ComponentRecord, generate_id
from core.errors import NotFoundError
from core.validation import validate_component
from db_models.component import Component
from storage.base import BaseStorageDriver
from . import queries

logger = logging.getLogger(__name__)


class ComponentNotFoundError(NotFoundError):
    """Raised when component doesn't exist."""
    pass


async def list_components(db: AsyncSession) -> list[Component]:
    """Return all components."""
    result = await db.execute(queries.select_all_components())
    return list(result.scalars().all())


async def get_component_by_id(db: AsyncSession, component_id: str) -> Component:
    """Get a component by ID. Raises ComponentNotFoundError if not found."""
    result = await db.execute(queries.select_component_by_id(component_id))
    component = result.scalar_one_or_none()
    if component is None:
        raise ComponentNotFoundError(f"Component {component_id} not found")
    return component


async def _snapshot(db: AsyncSession) -> list[ComponentRecord]:
    components = await list_components(db)
    return [ComponentRecord.model_validate(c) for c in components]


async def upsert_component(db: AsyncSession, payload: ComponentRecord) -> Component:
    """
    Create a component, or replace the stored one with the same ID.

    Raises:
        ValidationError: If the name or parent asset is missing, the parent
            component belongs to another asset, or the new parent is the
            component itself or one of its descendants
    """
    # Fail on missing fields before touching the database
    validate_component(payload)

    result = await db.execute(queries.select_asset_id(payload.parent_id))
    asset_ids = set(result.scalars().all())

    siblings = []
    if payload.parent_sub_id is not None:
        result = await db.execute(queries.select_components_for_asset(payload.parent_id))
        siblings = [ComponentRecord.model_validate(c) for c in result.scalars().all()]
    validate_component(payload, asset_ids=asset_ids, components=siblings)

    component_id = payload.id or generate_id()
    values = record_columns(payload)
    now = datetime.now(timezone.utc)

    result = await db.execute(queries.select_component_by_id(component_id))
    component = result.scalar_one_or_none()
    if component is None:
        component = Component(id=component_id, created_at=now, updated_at=now, **values)
        db.add(component)
        action = "added"
    else:
        for key, value in values.items():
            setattr(component, key, value)
        component.updated_at = now
        action = "edited"

    await db.commit()
    await db.refresh(component)
    logger.debug(
        "Component %s: id=%s name=%r parent_id=%s parent_sub_id=%s",
        action, component.id, component.name, component.parent_id, component.parent_sub_id,
    )
    return component


async def get_cascade_plan(db: AsyncSession, component_id: str) -> CascadePlan:
    """
    Resolve everything a delete of this component would remove.

    Raises:
        ComponentNotFoundError: If the component doesn't exist
    """
    await get_component_by_id(db, component_id)
    return DescendantResolver(await _snapshot(db)).resolve(component_id)


async def delete_component(
    db: AsyncSession,
    storage: BaseStorageDriver,
    component_id: str,
) -> DeleteOutcome:
    """
    Delete a component and every component nested beneath it.

    A missing component is a successful no-op. Stored files of every
    deleted component are removed afterwards; failures are reported.
    """
    outcome = DeleteOutcome(root_id=component_id)

    result = await db.execute(queries.select_component_by_id(component_id))
    if result.scalar_one_or_none() is None:
        outcome.found = False
        return outcome

    plan = DescendantResolver(await _snapshot(db)).resolve(component_id)
    result = await db.execute(queries.select_components_by_ids(plan.all_ids))
    doomed = list(result.scalars().all())
    records = [ComponentRecord.model_validate(c) for c in doomed]

    for component in doomed:
        await db.delete(component)
    await db.commit()

    outcome.deleted_ids = [component_id] + sorted(plan.descendant_ids)
    outcome.file_failures = await purge_files(storage, records)
    logger.debug(
        "Component deleted: id=%s with %d nested component(s)",
        component_id, len(plan.descendant_ids),
    )
    return outcome
