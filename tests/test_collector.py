from __future__ import annotations

import pytest

from fakehost import MODELS, FakeHost, error_type, intersection, primitive, union
from typezoom.collector import collect_dependencies
from typezoom.errors import UnknownTypeError, UnresolvedTypeError
from typezoom.model import EntityId, Kind


def _names(deps) -> list[str]:
    return [ident.name for ident in deps]


def test_mutual_reference_leaves_only_the_other_side() -> None:
    host = FakeHost()
    parent = host.entity("Parent")
    child = host.entity("Child")
    host.prop(parent, "child", host.type(child))
    host.prop(child, "parent", host.type(parent))

    deps = collect_dependencies(parent, host)

    assert list(deps) == [EntityId(MODELS, "Child")]
    assert deps[EntityId(MODELS, "Child")].kind is Kind.CLASS


def test_self_reference_terminates_with_empty_map() -> None:
    host = FakeHost()
    node = host.entity("Node")
    host.prop(node, "next", host.type(node))
    host.prop(node, "children", host.array_of(host.type(node)))

    assert collect_dependencies(node, host) == {}


def test_each_entity_recorded_once_in_discovery_order() -> None:
    host = FakeHost()
    root = host.entity("Root")
    a = host.entity("A")
    b = host.entity("B")
    c = host.entity("C")
    host.prop(root, "a", host.type(a))
    host.prop(root, "c", host.type(c))
    host.prop(a, "b", host.type(b))
    host.prop(c, "b", host.type(b))
    host.prop(c, "a", host.type(a))

    deps = collect_dependencies(root, host)

    assert _names(deps) == ["A", "B", "C"]


def test_array_element_is_recorded_but_not_the_array() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    item = host.entity("Item")
    host.prop(holder, "items", host.array_of(host.type(item)))

    deps = collect_dependencies(holder, host)

    assert _names(deps) == ["Item"]


def test_union_branches_recorded_individually() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    a = host.entity("A")
    b = host.entity("B")
    host.prop(holder, "either", union(host.type(a), host.type(b)))
    host.prop(holder, "both", intersection(host.type(b), primitive()))
    host.prop(holder, "scalar", union(primitive("string"), primitive("number")))

    deps = collect_dependencies(holder, host)

    assert _names(deps) == ["A", "B"]
    assert all(item.kind is Kind.CLASS for item in deps.values())


def test_type_literal_contents_traversed_but_not_recorded() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    inner = host.entity("Inner")
    host.prop(holder, "shape", host.literal(inner=host.type(inner), label=primitive()))

    deps = collect_dependencies(holder, host)

    assert _names(deps) == ["Inner"]


def test_cycle_through_type_literals_terminates() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    shape = host.literal(label=primitive())
    host.prop(shape.symbol, "self", shape)
    host.prop(holder, "shape", shape)

    assert collect_dependencies(holder, host) == {}


def test_generic_arguments_are_followed() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    box = host.entity("Box")
    item = host.entity("Item")
    host.prop(holder, "boxed", host.ref(box, host.type(item)))

    deps = collect_dependencies(holder, host)

    assert _names(deps) == ["Box", "Item"]


def test_enum_recorded_without_descending() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    color = host.enum("Color", {"Red": 0, "Green": 1})
    host.prop(holder, "color", host.type(color))

    deps = collect_dependencies(holder, host)

    assert list(deps) == [EntityId(MODELS, "Color")]
    assert deps[EntityId(MODELS, "Color")].kind is Kind.REGULAR_ENUM


def test_methods_and_storage_less_members_are_skipped() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    host.method(holder, "run")
    # Would fail if its type were looked at.
    host.prop(holder, "signature", error_type("Missing"), has_value=False)

    assert collect_dependencies(holder, host) == {}


def test_dep_item_carries_file_and_range() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    other = host.entity("Other", file_name="other.ts")
    host.prop(holder, "other", host.type(other))

    item = collect_dependencies(holder, host)[EntityId("other.ts", "Other")]

    decl = other.declarations[0]
    assert item.file_name == "other.ts"
    assert (item.text_range.pos, item.text_range.end) == (decl.pos, decl.end)
    assert item.type is host.type(other)


def test_unresolved_property_type_names_the_property() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    fine = host.entity("Fine")
    host.prop(holder, "fine", host.type(fine))
    broken = host.prop(holder, "broken", error_type("Missing"))

    with pytest.raises(UnresolvedTypeError) as excinfo:
        collect_dependencies(holder, host)

    err = excinfo.value
    assert err.symbol_name == "broken"
    assert err.file_name == MODELS
    assert err.text_range == (broken.value_declaration.pos, broken.value_declaration.end)
    assert '"broken"' in str(err)


def test_unresolved_branch_of_nested_union_names_the_property() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    a = host.entity("A")
    host.prop(holder, "ok", host.type(a))
    host.prop(a, "maybe", union(primitive(), error_type("Gone")))

    with pytest.raises(UnresolvedTypeError) as excinfo:
        collect_dependencies(holder, host)

    assert excinfo.value.symbol_name == "maybe"


def test_unresolved_generic_argument_is_wrapped() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    box = host.entity("Box")
    host.prop(holder, "boxed", host.ref(box, error_type("Missing")))

    with pytest.raises(UnresolvedTypeError, match="type argument of Box") as excinfo:
        collect_dependencies(holder, host)

    assert excinfo.value.symbol_name == "boxed"


def test_host_failure_becomes_unknown_type_error() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    host.prop(holder, "weird", RuntimeError("no idea"))

    with pytest.raises(UnknownTypeError, match="no idea") as excinfo:
        collect_dependencies(holder, host)

    assert excinfo.value.symbol_name == "weird"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_repeated_collection_gives_fresh_maps() -> None:
    host = FakeHost()
    holder = host.entity("Holder")
    item = host.entity("Item")
    host.prop(holder, "item", host.type(item))

    first = collect_dependencies(holder, host)
    second = collect_dependencies(holder, host)

    assert first == second
    assert first is not second
