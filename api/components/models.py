# api/components/models.py
from datetime import datetime

from pydantic import BaseModel

from core.entities import ComponentRecord


class ComponentUpsert(ComponentRecord):
    """Component payload. Omit ``id`` to create a new component."""
    pass


class ComponentRead(ComponentRecord):
    id: str
    parent_id: str
    created_at: datetime
    updated_at: datetime


class CascadePlanRead(BaseModel):
    root_id: str
    descendant_ids: list[str]
