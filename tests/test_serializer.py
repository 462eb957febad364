from __future__ import annotations

import json

import pytest

from fakehost import FakeHost, primitive
from typezoom.collector import collect_dependencies
from typezoom.errors import UnknownTypeError
from typezoom.model import (
    CONSTRUCTOR_MEMBER,
    DecoratorArgument,
    DecoratorRecord,
    DepMapItem,
    EnumMemberRecord,
    EntryResult,
    FileResult,
    Kind,
    SerializedMember,
    SymbolFlags,
)
from typezoom.renderer.json import render_json
from typezoom.serializer import EntitySerializer


def _fake_decorators(node: str) -> DecoratorRecord | None:
    if not node.startswith("@Prop"):
        return None
    return DecoratorRecord("Prop", [DecoratorArgument("identifier", "String")])


def test_class_members_in_declaration_order() -> None:
    host = FakeHost()
    view = host.entity("View")
    item = host.entity("Item")
    host.prop(view, "title", primitive("string"))
    host.prop(view, "items", host.array_of(host.type(item)))
    host.method(view, "render")

    entity = EntitySerializer(host).serialize_class(view)

    assert entity.name == "View"
    assert entity.kind == "class"
    assert entity.type == "typeof View"
    assert entity.text == view.value_declaration.text
    assert entity.symbol_type == "CLASS"
    assert [m.name for m in entity.members] == ["title", "items", "render"]

    title, items, render = entity.members
    assert title.type == "string" and title.is_primitive and not title.is_array
    assert title.type_arguments is None
    assert items.type == "Item[]" and items.is_array
    assert items.type_arguments == ["Item"]
    assert render.symbol_type == "METHOD"


def test_member_without_value_declaration_keeps_empty_fields() -> None:
    host = FakeHost()
    view = host.entity("View")
    host.prop(view, CONSTRUCTOR_MEMBER, primitive(), has_value=False, flags=SymbolFlags.CONSTRUCTOR)

    (member,) = EntitySerializer(host).serialize_class(view).members

    assert isinstance(member, SerializedMember)
    assert member.type is None
    assert member.text is None
    assert member.is_primitive is False

    entry = EntryResult(EntitySerializer(host).serialize_class(view))
    data = json.loads(render_json([FileResult("view.ts", [entry])]))
    rendered = data[0]["results"][0]["root"]["members"][0]
    assert rendered["type"] is None
    assert rendered["text"] is None
    assert rendered["typeArguments"] is None


def test_interface_has_no_type_or_text() -> None:
    host = FakeHost()
    shape = host.entity("Shape", flags=SymbolFlags.INTERFACE)

    entity = EntitySerializer(host).serialize_class(shape)

    assert entity.type is None
    assert entity.text is None
    assert entity.symbol_type == "INTERFACE"


def test_enum_members_carry_runtime_values() -> None:
    host = FakeHost()
    color = host.enum("Color", {"Red": 0, "Green": 5, "Named": "n"})

    entity = EntitySerializer(host).serialize_enum(color)

    assert entity.kind == "enum"
    assert entity.type == "typeof Color"
    assert all(isinstance(m, EnumMemberRecord) for m in entity.members)
    assert [(m.symbol.name, m.value) for m in entity.members] == [
        ("Red", 0),
        ("Green", 5),
        ("Named", "n"),
    ]
    assert entity.members[0].symbol.type == "Color.Red"
    assert entity.members[0].symbol.symbol_type == "ENUM_MEMBER"


def test_enum_serialization_is_idempotent() -> None:
    host = FakeHost()
    color = host.enum("Color", {"Red": 0, "Green": 1})
    serializer = EntitySerializer(host)

    first = render_json([FileResult("a.ts", [EntryResult(serializer.serialize_enum(color))])])
    second = render_json([FileResult("a.ts", [EntryResult(serializer.serialize_enum(color))])])

    assert first == second


def test_dependencies_dispatch_on_kind() -> None:
    host = FakeHost()
    view = host.entity("View")
    color = host.enum("Color", {"Red": 0})
    item = host.entity("Item")
    host.prop(view, "color", host.type(color))
    host.prop(view, "item", host.type(item))

    serializer = EntitySerializer(host)
    deps = [serializer.serialize_dependency(d) for d in collect_dependencies(view, host).values()]

    assert [(d.name, d.kind) for d in deps] == [("Color", "enum"), ("Item", "class")]


def test_decorators_go_through_the_collaborator() -> None:
    host = FakeHost()
    view = host.entity("View")
    label = host.prop(view, "label", primitive())
    label.value_declaration.decorators = ["@Prop(String)", "@Watch('x')"]

    plain = EntitySerializer(host).serialize_class(view)
    decorated = EntitySerializer(host, decorator_serializer=_fake_decorators).serialize_class(view)

    assert plain.members[0].decorators == []
    assert decorated.members[0].decorators == [
        DecoratorRecord("Prop", [DecoratorArgument("identifier", "String")])
    ]


def test_dependency_without_symbol_is_rejected() -> None:
    item = DepMapItem(type=primitive(), kind=Kind.CLASS, file_name="models.ts", text_range=None)

    with pytest.raises(UnknownTypeError, match="has no symbol"):
        EntitySerializer(FakeHost()).serialize_dependency(item)
