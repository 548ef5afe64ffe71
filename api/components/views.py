# api/components/views.py
"""
Component management endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.assets.models import DeleteResponse
from core.errors import ValidationError
from db import get_session
from storage import BaseStorageDriver, get_storage
from .models import CascadePlanRead, ComponentRead, ComponentUpsert
from . import db_manager

router = APIRouter(prefix="/components", tags=["components"])


@router.get(
    "",
    response_model=list[ComponentRead],
    summary="List components",
)
async def list_components_endpoint(
    db: AsyncSession = Depends(get_session),
) -> list[ComponentRead]:
    components = await db_manager.list_components(db)
    return [ComponentRead.model_validate(c) for c in components]


@router.get(
    "/{component_id}",
    response_model=ComponentRead,
    summary="Get component by ID",
)
async def get_component_endpoint(
    component_id: str,
    db: AsyncSession = Depends(get_session),
) -> ComponentRead:
    try:
        component = await db_manager.get_component_by_id(db, component_id)
    except db_manager.ComponentNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return ComponentRead.model_validate(component)


@router.get(
    "/{component_id}/descendants",
    response_model=CascadePlanRead,
    summary="List the components a delete would remove",
)
async def get_descendants_endpoint(
    component_id: str,
    db: AsyncSession = Depends(get_session),
) -> CascadePlanRead:
    try:
        plan = await db_manager.get_cascade_plan(db, component_id)
    except db_manager.ComponentNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return CascadePlanRead(
        root_id=plan.root_id,
        descendant_ids=sorted(plan.descendant_ids),
    )


@router.put(
    "",
    response_model=ComponentRead,
    summary="Create or update a component",
)
async def upsert_component_endpoint(
    payload: ComponentUpsert,
    db: AsyncSession = Depends(get_session),
) -> ComponentRead:
    """
    Store a component under an existing asset, optionally nested under
    another component of the same asset.
    """
    try:
        component = await db_manager.upsert_component(db, payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return ComponentRead.model_validate(component)


@router.delete(
    "/{component_id}",
    response_model=DeleteResponse,
    summary="Delete a component and everything nested beneath it",
)
async def delete_component_endpoint(
    component_id: str,
    db: AsyncSession = Depends(get_session),
    storage: BaseStorageDriver = Depends(get_storage),
) -> DeleteResponse:
    outcome = await db_manager.delete_component(db, storage, component_id)
    return DeleteResponse.from_outcome(outcome)
