# core/tree_store.py
"""
In-memory index over the flat asset and component collections.
"""
from collections.abc import Iterable

from .entities import AssetRecord, ComponentRecord


class TreeStore:
    """
    Canonical asset and component collections with parent/child queries.

    Lookups by id are dict hits. Children are indexed per parent so a child
    query costs O(k) in the number of children. Insertion order is kept.
    """

    def __init__(
        self,
        assets: Iterable[AssetRecord] = (),
        components: Iterable[ComponentRecord] = (),
    ):
        self._assets: dict[str, AssetRecord] = {}
        self._components: dict[str, ComponentRecord] = {}
        # asset id -> first-level component ids
        self._asset_children: dict[str, dict[str, None]] = {}
        # component id -> nested component ids
        self._component_children: dict[str, dict[str, None]] = {}
        self.load(assets, components)

    def load(
        self,
        assets: Iterable[AssetRecord],
        components: Iterable[ComponentRecord],
    ) -> None:
        """Rebuild the whole index from fresh collections."""
        self._assets.clear()
        self._components.clear()
        self._asset_children.clear()
        self._component_children.clear()
        for asset in assets:
            self.upsert_asset(asset)
        for component in components:
            self.upsert_component(component)

    # ---------- queries ----------

    def get_asset(self, asset_id: str) -> AssetRecord | None:
        return self._assets.get(asset_id)

    def get_component(self, component_id: str) -> ComponentRecord | None:
        return self._components.get(component_id)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._assets or record_id in self._components

    def assets(self) -> list[AssetRecord]:
        return list(self._assets.values())

    def components(self) -> list[ComponentRecord]:
        return list(self._components.values())

    def children_of(self, node_id: str) -> list[ComponentRecord]:
        """
        Direct children of an asset or a component.

        For an asset these are its first-level components (no parent
        component). For a component, the components nested right under it.
        Unknown ids have no children.
        """
        if node_id in self._assets:
            child_ids = self._asset_children.get(node_id, {})
        else:
            child_ids = self._component_children.get(node_id, {})
        return [self._components[cid] for cid in child_ids]

    def components_of_asset(self, asset_id: str) -> list[ComponentRecord]:
        """Every component owned by an asset, at any depth."""
        return [c for c in self._components.values() if c.parent_id == asset_id]

    # ---------- mutation ----------

    def upsert_asset(self, asset: AssetRecord) -> None:
        self._assets[asset.id] = asset

    def upsert_component(self, component: ComponentRecord) -> None:
        previous = self._components.get(component.id)
        if previous is not None:
            self._unlink(previous)
        self._components[component.id] = component
        self._link(component)

    def remove_asset(self, asset_id: str) -> AssetRecord | None:
        return self._assets.pop(asset_id, None)

    def remove_component(self, component_id: str) -> ComponentRecord | None:
        component = self._components.pop(component_id, None)
        if component is not None:
            self._unlink(component)
        return component

    def _link(self, component: ComponentRecord) -> None:
        if component.parent_sub_id is None:
            bucket = self._asset_children.setdefault(component.parent_id, {})
        else:
            bucket = self._component_children.setdefault(component.parent_sub_id, {})
        bucket[component.id] = None

    def _unlink(self, component: ComponentRecord) -> None:
        if component.parent_sub_id is None:
            bucket = self._asset_children.get(component.parent_id)
        else:
            bucket = self._component_children.get(component.parent_sub_id)
        if bucket is not None:
            bucket.pop(component.id, None)
