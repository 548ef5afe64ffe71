# db_models/inventory_base.py
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column


class InventoryColumnsMixin:
    """Columns shared by assets and components."""

    id: Mapped[str] = mapped_column(String(20), primary_key=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    manufacturer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    model_number: Mapped[str | None] = mapped_column(String(255), nullable=True)
    serial_number: Mapped[str | None] = mapped_column(String(255), nullable=True)
    purchase_date: Mapped[str | None] = mapped_column(String(32), nullable=True)
    link: Mapped[str | None] = mapped_column(Text, nullable=True)

    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    warranty: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    maintenance_events: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )

    # Attachment slots: ordered paths, parallel file info, legacy first path
    photo_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    photo_paths: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    photo_info: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    receipt_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    receipt_paths: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    receipt_info: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    manual_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    manual_paths: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    manual_info: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
