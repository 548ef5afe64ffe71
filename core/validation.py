# core/validation.py
"""
Write-side checks run before any I/O.
"""
from collections.abc import Container, Iterable

from .descendants import DescendantResolver
from .entities import AssetRecord, ComponentRecord
from .errors import ValidationError


def validate_asset(asset: AssetRecord) -> None:
    if not asset.name or not asset.name.strip():
        raise ValidationError("Asset name is required")


def validate_component(
    component: ComponentRecord,
    asset_ids: Container[str] | None = None,
    components: Iterable[ComponentRecord] | None = None,
) -> None:
    """
    Check required fields and, when the collections are given, the parent links.

    Raises:
        ValidationError: if the name or parent asset is missing, the parent
            component belongs to another asset, or the link would make a
            component its own ancestor.
    """
    if not component.name or not component.name.strip():
        raise ValidationError("Component name is required")
    if not component.parent_id:
        raise ValidationError("Component parent asset is required")
    if asset_ids is not None and component.parent_id not in asset_ids:
        raise ValidationError(f"Parent asset {component.parent_id} not found")

    if component.parent_sub_id is None or components is None:
        return
    validate_component_parent(component, components)


def validate_component_parent(
    component: ComponentRecord,
    components: Iterable[ComponentRecord],
) -> None:
    parent_sub_id = component.parent_sub_id
    if component.id is not None and parent_sub_id == component.id:
        raise ValidationError("A component cannot be its own parent")

    by_id = {c.id: c for c in components}
    parent = by_id.get(parent_sub_id)
    if parent is None:
        raise ValidationError(f"Parent component {parent_sub_id} not found")
    if parent.parent_id != component.parent_id:
        raise ValidationError(
            f"Parent component {parent_sub_id} belongs to asset {parent.parent_id}, "
            f"not {component.parent_id}"
        )

    if component.id is not None and component.id in by_id:
        plan = DescendantResolver(by_id.values()).resolve(component.id)
        if parent_sub_id in plan.descendant_ids:
            raise ValidationError(
                f"Component {parent_sub_id} is nested under {component.id} "
                "and cannot become its parent"
            )
