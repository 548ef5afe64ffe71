from core.descendants import CascadePlan, DescendantResolver, first_level_components, resolve_descendants
from core.entities import ComponentRecord
from core.tree_store import TreeStore


def _component(cid, parent_sub_id=None, parent_id="A"):
    return ComponentRecord(id=cid, name=cid, parent_id=parent_id, parent_sub_id=parent_sub_id)


def test_cascade_collects_the_whole_chain():
    components = [
        _component("C1"),
        _component("C2", "C1"),
        _component("C3", "C2"),
        _component("C4"),
        _component("C5", "C4"),
    ]
    plan = DescendantResolver(components).resolve("C1")

    assert plan == CascadePlan(root_id="C1", descendant_ids=frozenset({"C2", "C3"}))
    assert plan.all_ids == {"C1", "C2", "C3"}


def test_branching_subtree():
    components = [
        _component("R"),
        _component("X", "R"),
        _component("Y", "R"),
        _component("X1", "X"),
        _component("Y1", "Y"),
        _component("Y2", "Y1"),
    ]
    plan = resolve_descendants(components, "R")
    assert plan.descendant_ids == {"X", "Y", "X1", "Y1", "Y2"}


def test_leaf_and_unknown_root_have_no_descendants():
    components = [_component("C1"), _component("C2", "C1")]
    assert resolve_descendants(components, "C2").descendant_ids == frozenset()
    assert resolve_descendants(components, "missing").descendant_ids == frozenset()


def test_cycle_terminates_and_root_is_not_a_descendant():
    components = [_component("C1", "C2"), _component("C2", "C1"), _component("C3", "C2")]
    plan = resolve_descendants(components, "C1")
    assert plan.descendant_ids == {"C2", "C3"}


def test_self_parented_component():
    plan = resolve_descendants([_component("C1", "C1")], "C1")
    assert plan.descendant_ids == frozenset()


def test_resolves_from_tree_store():
    tree = TreeStore([], [_component("C1"), _component("C2", "C1")])
    assert resolve_descendants(tree, "C1").descendant_ids == {"C2"}


def test_first_level_components_skip_nested_ones():
    components = [
        _component("C1"),
        _component("D2", "C1"),
        _component("C3"),
        _component("B1", parent_id="B"),
    ]
    assert first_level_components(components, "A") == ["C1", "C3"]
    assert first_level_components(TreeStore([], components), "B") == ["B1"]
