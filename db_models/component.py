# db_models/component.py
from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db_base import Base
from db_models.inventory_base import InventoryColumnsMixin


class Component(InventoryColumnsMixin, Base):
    __tablename__ = "components"

    # Plain columns, not foreign keys: nested components outlive a deleted
    # asset and keep pointing at it.
    parent_id: Mapped[str] = mapped_column(String(20), index=True, nullable=False)

    parent_sub_id: Mapped[str | None] = mapped_column(
        String(20),
        index=True,
        nullable=True,
    )

    purchase_price: Mapped[float | None] = mapped_column(Float, nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
