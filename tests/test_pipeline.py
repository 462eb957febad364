from __future__ import annotations

import logging
from pathlib import Path

import pytest

from typezoom.decorators import serialize_literal_decorator
from typezoom.errors import UnresolvedTypeError
from typezoom.filters import is_decorated_by
from typezoom.model import DecoratorArgument, DecoratorRecord, EnumMemberRecord
from typezoom.pipeline import SerializerOptions, collect


def _w(p: Path, rel: str, content: str) -> None:
    f = p / rel
    f.parent.mkdir(parents=True, exist_ok=True)
    f.write_text(content, encoding="utf-8")


MODELS = """\
export enum Status { Draft, Published = "published" }

export class Parent {
    child: Child;
}

export class Child {
    parent: Parent;
    tags: Tag[];
}

export interface Tag {
    label: string;
    meta: { owner: Owner };
}

export class Owner {
    name: string;
}
"""

VIEW = """\
import { Parent, Status } from "./models";

@Component({ name: "view" })
export class View {
    @Prop(String) label: string = "";
    parent: Parent;
    status: Status;
    constructor() {}
}

export class Plain {
    parent: Parent;
}
"""


def _project(tmp_path: Path) -> Path:
    _w(tmp_path, "models.ts", MODELS)
    _w(tmp_path, "view.ts", VIEW)
    return tmp_path / "view.ts"


def _options(**kwargs) -> SerializerOptions:
    return SerializerOptions(entry_filter=is_decorated_by("Component"), **kwargs)


def test_collect_decorated_entry_with_dependencies(tmp_path: Path) -> None:
    root = _project(tmp_path)

    results = collect([root], _options())

    assert [Path(r.file_name).name for r in results] == ["view.ts"]
    (entry,) = results[0].results
    assert entry.root.name == "View"
    assert entry.root.type == "typeof View"
    assert [d.name for d in entry.dependencies] == ["Parent", "Child", "Tag", "Owner", "Status"]
    assert "View" not in [d.name for d in entry.dependencies]


def test_enum_dependency_values(tmp_path: Path) -> None:
    results = collect([_project(tmp_path)], _options())

    status = next(d for d in results[0].results[0].dependencies if d.name == "Status")
    assert status.kind == "enum"
    assert all(isinstance(m, EnumMemberRecord) for m in status.members)
    assert [(m.symbol.name, m.value) for m in status.members] == [
        ("Draft", 0),
        ("Published", "published"),
    ]


def test_root_members_and_decorators(tmp_path: Path) -> None:
    options = _options(decorator_serializer=serialize_literal_decorator(["Component", "Prop"]))

    root = collect([_project(tmp_path)], options)[0].results[0].root

    assert root.decorators == [
        DecoratorRecord("Component", [DecoratorArgument("object", '{\n    name: "view"\n}')])
    ]
    members = {m.name: m for m in root.members}
    assert list(members) == ["label", "parent", "status", "__constructor"]
    assert members["label"].decorators == [
        DecoratorRecord("Prop", [DecoratorArgument("identifier", "String")])
    ]
    assert members["label"].is_primitive
    assert members["parent"].type == "Parent"
    assert members["__constructor"].type is None
    assert members["__constructor"].text is None


def test_interface_dependency_has_no_value_declaration(tmp_path: Path) -> None:
    results = collect([_project(tmp_path)], _options())

    tag = next(d for d in results[0].results[0].dependencies if d.name == "Tag")
    assert tag.type is None
    assert tag.text is None
    assert [m.name for m in tag.members] == ["label", "meta"]
    assert tag.members[1].type == "{ owner: Owner; }"


def test_without_filter_nothing_is_selected(tmp_path: Path) -> None:
    assert collect([_project(tmp_path)]) == []


def test_custom_filter_sees_declarations(tmp_path: Path) -> None:
    options = SerializerOptions(entry_filter=lambda decl: decl.name == "Plain")

    results = collect([_project(tmp_path)], options)

    assert [e.root.name for e in results[0].results] == ["Plain"]
    assert [d.name for d in results[0].results[0].dependencies] == ["Parent", "Child", "Tag", "Owner"]


def test_declaration_files_never_contribute(tmp_path: Path) -> None:
    _w(tmp_path, "types.d.ts", "@Component\nexport class Ambient { x: string; }\n")

    assert collect([tmp_path / "types.d.ts"], _options()) == []


BROKEN = """\
import { Missing } from "./missing";

@Component
export class Broken {
    ok: string;
    broken: Missing;
}

@Component
export class Fine {
    ok: string;
}
"""


def test_unresolved_reference_aborts(tmp_path: Path) -> None:
    _w(tmp_path, "broken.ts", BROKEN)

    with pytest.raises(UnresolvedTypeError) as excinfo:
        collect([tmp_path / "broken.ts"], _options())

    err = excinfo.value
    assert err.symbol_name == "broken"
    assert err.file_name == str(tmp_path / "broken.ts")
    assert "Missing" in str(err)


def test_skip_failed_entries_keeps_the_rest(tmp_path: Path, caplog) -> None:
    _w(tmp_path, "broken.ts", BROKEN)

    with caplog.at_level(logging.WARNING, logger="typezoom"):
        results = collect([tmp_path / "broken.ts"], _options(skip_failed_entries=True))

    assert [e.root.name for e in results[0].results] == ["Fine"]
    assert "Skipping Broken" in caplog.text


GENERIC_VIEW = """\
export class Profile { bio: string; }
export class Registry { size: number; }
export class Box<T> { value: T; }

@Component
export class User extends Box<Profile> {
    static registry: Registry;
    id: string;
}
"""


def test_inherited_generic_property_reaches_argument(tmp_path: Path) -> None:
    _w(tmp_path, "user.ts", GENERIC_VIEW)

    (entry,) = collect([tmp_path / "user.ts"], _options())[0].results

    assert [d.name for d in entry.dependencies] == ["Profile"]
    assert [m.name for m in entry.root.members] == ["id"]
