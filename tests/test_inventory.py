import pytest

from core.attachment_stager import FileRef
from core.entities import AssetRecord, ComponentRecord, SlotType
from core.errors import ValidationError
from core.inventory import Inventory


def _seed(collaborator, assets, components):
    for asset in assets:
        collaborator.assets[asset.id] = asset
    for component in components:
        collaborator.components[component.id] = component


@pytest.fixture
async def inventory(collaborator):
    _seed(
        collaborator,
        [AssetRecord(id="A", name="Bike"), AssetRecord(id="B", name="Stereo")],
        [
            ComponentRecord(id="C1", name="Wheel", parent_id="A"),
            ComponentRecord(id="C2", name="Tyre", parent_id="A", parent_sub_id="C1"),
            ComponentRecord(id="C3", name="Valve", parent_id="A", parent_sub_id="C2"),
            ComponentRecord(id="C4", name="Saddle", parent_id="A"),
            ComponentRecord(id="S1", name="Speaker", parent_id="B"),
        ],
    )
    inventory = Inventory(collaborator)
    await inventory.refresh()
    return inventory


@pytest.mark.anyio
async def test_refresh_builds_the_tree(inventory):
    assert [c.id for c in inventory.children_of("A")] == ["C1", "C4"]
    assert [c.id for c in inventory.children_of("C1")] == ["C2"]
    assert [c.id for c in inventory.children_of("B")] == ["S1"]


@pytest.mark.anyio
async def test_component_delete_cascades(inventory, collaborator):
    report = await inventory.delete_component("C1")

    assert report.ok
    assert report.removed_ids == ["C1", "C2", "C3"]
    assert sorted(args[0] for args in collaborator.calls_to("delete_component")) == ["C1", "C2", "C3"]
    assert set(collaborator.components) == {"C4", "S1"}
    assert [c.id for c in inventory.children_of("A")] == ["C4"]
    assert inventory.tree.get_component("C3") is None


@pytest.mark.anyio
async def test_asset_delete_leaves_nested_components(inventory, collaborator):
    report = await inventory.delete_asset("A")

    assert report.removed_ids == ["A", "C1", "C4"]
    assert collaborator.calls_to("delete_asset") == [["A"]]
    # C2 and C3 hang under C1, not directly under the asset
    assert set(collaborator.components) == {"C2", "C3", "S1"}
    assert inventory.tree.get_component("C2") is not None
    assert inventory.tree.get_asset("A") is None
    assert inventory.tree.get_asset("B") is not None


@pytest.mark.anyio
async def test_deleting_a_missing_component_is_a_no_op(inventory, collaborator):
    report = await inventory.delete_component("nope")
    assert report.removed_ids == []
    assert report.ok
    assert collaborator.calls == []


@pytest.mark.anyio
async def test_failed_component_deletion_is_reported(inventory, collaborator):
    collaborator.failing_deletes.add("C2")
    report = await inventory.delete_component("C1")

    assert [e.target for e in report.failures] == ["C2"]
    assert report.removed_ids == ["C1", "C2", "C3"]
    assert inventory.tree.get_component("C2") is None


@pytest.mark.anyio
async def test_save_component_rejects_unknown_asset(inventory, collaborator):
    with pytest.raises(ValidationError):
        await inventory.save_component(ComponentRecord(name="Bell", parent_id="Z"), {})
    assert collaborator.calls == []


@pytest.mark.anyio
async def test_save_component_rejects_parent_of_another_asset(inventory, collaborator):
    component = ComponentRecord(name="Bell", parent_id="A", parent_sub_id="S1")
    with pytest.raises(ValidationError):
        await inventory.save_component(component, {})
    assert collaborator.calls == []


@pytest.mark.anyio
async def test_save_component_rejects_cycles(inventory, collaborator):
    self_parent = ComponentRecord(id="C1", name="Wheel", parent_id="A", parent_sub_id="C1")
    with pytest.raises(ValidationError):
        await inventory.save_component(self_parent, {})

    under_descendant = ComponentRecord(id="C1", name="Wheel", parent_id="A", parent_sub_id="C3")
    with pytest.raises(ValidationError):
        await inventory.save_component(under_descendant, {})
    assert collaborator.calls == []


@pytest.mark.anyio
async def test_save_session_creates_nested_component(inventory, collaborator):
    session = inventory.open_session()
    session.add_file(SlotType.MANUAL, FileRef.from_bytes("valve.pdf", b"%PDF", "application/pdf"))

    form = ComponentRecord(name="Valve cap", parent_id="A", parent_sub_id="C3")
    result = await inventory.save_session(session, form)

    saved = result.record
    assert saved.manual_paths == ["/Manuals/0001-valve.pdf"]
    assert [c.id for c in inventory.children_of("C3")] == [saved.id]
    assert saved.id in collaborator.components
    assert session.closed


@pytest.mark.anyio
async def test_save_session_edits_asset(inventory):
    session = inventory.open_session(inventory.tree.get_asset("B"))
    result = await inventory.save_session(session, AssetRecord(name="Hi-fi"))

    assert result.record.id == "B"
    assert inventory.tree.get_asset("B").name == "Hi-fi"


@pytest.mark.anyio
async def test_unexpected_component_deletion_exception_is_reported(inventory, collaborator):
    collaborator.raising["C3"] = RuntimeError("socket closed")
    report = await inventory.delete_component("C1")

    assert [e.target for e in report.failures] == ["C3"]
    assert "socket closed" in report.failures[0].reason
    assert set(collaborator.components) == {"C3", "C4", "S1"}
