# core/descendants.py
"""
Cascading-delete resolution over the component tree.
"""
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field

from .entities import ComponentRecord
from .tree_store import TreeStore


@dataclass(frozen=True)
class CascadePlan:
    """The component explicitly deleted and everything nested beneath it."""

    root_id: str
    descendant_ids: frozenset[str] = field(default_factory=frozenset)

    @property
    def all_ids(self) -> frozenset[str]:
        return self.descendant_ids | {self.root_id}


class DescendantResolver:
    """
    Breadth-first resolution of every component nested under a root.

    Children are matched on ``parent_sub_id``. A visited set keyed by id keeps
    the walk linear and terminating even if the data holds a cycle.
    """

    def __init__(self, components: Iterable[ComponentRecord] | TreeStore):
        if isinstance(components, TreeStore):
            components = components.components()
        self._children: dict[str, list[str]] = {}
        for component in components:
            if component.parent_sub_id is not None:
                self._children.setdefault(component.parent_sub_id, []).append(component.id)

    def resolve(self, root_id: str) -> CascadePlan:
        visited = {root_id}
        descendants: set[str] = set()
        queue = deque([root_id])

        while queue:
            node_id = queue.popleft()
            for child_id in self._children.get(node_id, ()):
                if child_id in visited:
                    continue
                visited.add(child_id)
                descendants.add(child_id)
                queue.append(child_id)

        return CascadePlan(root_id=root_id, descendant_ids=frozenset(descendants))


def resolve_descendants(
    components: Iterable[ComponentRecord] | TreeStore,
    root_id: str,
) -> CascadePlan:
    """Shortcut for a one-off resolution."""
    return DescendantResolver(components).resolve(root_id)


def first_level_components(
    components: Iterable[ComponentRecord] | TreeStore,
    asset_id: str,
) -> list[str]:
    """
    Ids removed together with an asset.

    Only components attached directly to the asset go. Components nested
    under them are left alone, unlike a component delete which cascades
    through the whole subtree.
    """
    if isinstance(components, TreeStore):
        components = components.components()
    return [
        c.id for c in components
        if c.parent_id == asset_id and c.parent_sub_id is None
    ]
