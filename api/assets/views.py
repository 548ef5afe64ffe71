# api/assets/views.py
"""
Asset management endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ValidationError
from db import get_session
from storage import BaseStorageDriver, get_storage
from .models import AssetRead, AssetUpsert, DeleteResponse
from . import db_manager

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get(
    "",
    response_model=list[AssetRead],
    summary="List assets",
)
async def list_assets_endpoint(
    db: AsyncSession = Depends(get_session),
) -> list[AssetRead]:
    assets = await db_manager.list_assets(db)
    return [AssetRead.model_validate(a) for a in assets]


@router.get(
    "/{asset_id}",
    response_model=AssetRead,
    summary="Get asset by ID",
)
async def get_asset_endpoint(
    asset_id: str,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    try:
        asset = await db_manager.get_asset_by_id(db, asset_id)
    except db_manager.AssetNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return AssetRead.model_validate(asset)


@router.put(
    "",
    response_model=AssetRead,
    summary="Create or update an asset",
)
async def upsert_asset_endpoint(
    payload: AssetUpsert,
    db: AsyncSession = Depends(get_session),
) -> AssetRead:
    """
    Store an asset. The stored creation time wins over the payload's.
    """
    try:
        asset = await db_manager.upsert_asset(db, payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return AssetRead.model_validate(asset)


@router.delete(
    "/{asset_id}",
    response_model=DeleteResponse,
    summary="Delete an asset and its first-level components",
)
async def delete_asset_endpoint(
    asset_id: str,
    db: AsyncSession = Depends(get_session),
    storage: BaseStorageDriver = Depends(get_storage),
) -> DeleteResponse:
    """
    Delete an asset. Deleting an unknown ID succeeds with ``not_found`` set.
    """
    outcome = await db_manager.delete_asset(db, storage, asset_id)
    return DeleteResponse.from_outcome(outcome)
