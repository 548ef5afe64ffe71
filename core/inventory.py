# core/inventory.py
"""
Facade the UI layer binds to: tree queries, edit sessions, saves and
cascading deletes.
"""
import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from .attachment_stager import AttachmentStager
from .collaborator import StorageCollaborator
from .descendants import DescendantResolver, first_level_components
from .edit_session import EditSession
from .entities import AssetRecord, ComponentRecord, SlotType
from .errors import DeletionError
from .reconciliation import SaveResult, reconcile_and_save
from .tree_store import TreeStore
from .validation import validate_asset, validate_component

logger = logging.getLogger(__name__)


@dataclass
class DeleteReport:
    root_id: str
    removed_ids: list[str] = field(default_factory=list)
    failures: list[DeletionError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class Inventory:
    """
    Client-side view of the inventory backed by a storage collaborator.

    The TreeStore mirrors the persisted collections; every save and delete
    goes to the collaborator first and is then applied to the tree.
    """

    def __init__(self, collaborator: StorageCollaborator):
        self.collaborator = collaborator
        self.tree = TreeStore()

    async def refresh(self) -> None:
        assets, components = await asyncio.gather(
            self.collaborator.list_assets(),
            self.collaborator.list_components(),
        )
        self.tree.load(assets, components)

    def children_of(self, node_id: str) -> list[ComponentRecord]:
        return self.tree.children_of(node_id)

    def open_session(self, record: AssetRecord | ComponentRecord | None = None) -> EditSession:
        return EditSession(record)

    async def save_asset(
        self,
        asset: AssetRecord,
        stagers: Mapping[SlotType, AttachmentStager],
    ) -> SaveResult[AssetRecord]:
        validate_asset(asset)
        result = await reconcile_and_save(asset, stagers, self.collaborator)
        self.tree.upsert_asset(result.record)
        return result

    async def save_component(
        self,
        component: ComponentRecord,
        stagers: Mapping[SlotType, AttachmentStager],
    ) -> SaveResult[ComponentRecord]:
        validate_component(
            component,
            asset_ids={a.id for a in self.tree.assets()},
            components=self.tree.components(),
        )
        result = await reconcile_and_save(component, stagers, self.collaborator)
        self.tree.upsert_component(result.record)
        return result

    async def save_session(
        self,
        session: EditSession,
        form: AssetRecord | ComponentRecord,
    ) -> SaveResult:
        """Save a session's form through the matching per-type entry point."""
        draft = session.prepare(form)
        if isinstance(draft, ComponentRecord):
            result = await self.save_component(draft, session.stagers)
        else:
            result = await self.save_asset(draft, session.stagers)
        session.cancel()
        return result

    async def delete_asset(self, asset_id: str) -> DeleteReport:
        """
        Delete an asset and its first-level components.

        Components nested below those stay in storage and in the tree.
        """
        report = DeleteReport(root_id=asset_id)
        doomed = first_level_components(self.tree, asset_id)
        try:
            await self.collaborator.delete_asset(asset_id)
        except DeletionError as exc:
            logger.warning("%s", exc)
            report.failures.append(exc)

        if self.tree.remove_asset(asset_id) is not None:
            report.removed_ids.append(asset_id)
        for component_id in doomed:
            self.tree.remove_component(component_id)
            report.removed_ids.append(component_id)
        return report

    async def delete_component(self, component_id: str) -> DeleteReport:
        """Delete a component and every component nested beneath it."""
        report = DeleteReport(root_id=component_id)
        if self.tree.get_component(component_id) is None:
            return report

        plan = DescendantResolver(self.tree).resolve(component_id)
        ordered = [component_id, *sorted(plan.descendant_ids)]
        results = await asyncio.gather(
            *(self._delete_component(cid) for cid in ordered)
        )
        for cid, error in zip(ordered, results):
            if error is not None:
                report.failures.append(error)
            self.tree.remove_component(cid)
            report.removed_ids.append(cid)
        return report

    async def _delete_component(self, component_id: str) -> DeletionError | None:
        try:
            await self.collaborator.delete_component(component_id)
        except DeletionError as exc:
            logger.warning("%s", exc)
            return exc
        except Exception as exc:
            error = DeletionError(component_id, str(exc) or type(exc).__name__)
            logger.warning("%s", error, exc_info=exc)
            return error
        return None
