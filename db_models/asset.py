# db_models/asset.py
from typing import Any

from sqlalchemy import JSON, Float, Text
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base
from db_models.inventory_base import InventoryColumnsMixin


class Asset(InventoryColumnsMixin, Base):
    __tablename__ = "assets"

    price: Mapped[float | None] = mapped_column(Float, nullable=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    secondary_warranty: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
