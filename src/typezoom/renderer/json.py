"""Render collection results as JSON."""

from __future__ import annotations

import json
from pathlib import Path

from typezoom.model import (
    DecoratorRecord,
    EnumMemberRecord,
    FileResult,
    SerializedEntity,
    SerializedMember,
    SerializedSymbol,
)


def _decorator_to_dict(record: DecoratorRecord) -> dict:
    args = []
    for arg in record.args:
        d: dict = {"type": arg.type}
        if arg.type != "null":
            d["value"] = arg.value
        args.append(d)
    return {"name": record.name, "args": args}


def _symbol_to_dict(sym: SerializedSymbol) -> dict:
    d: dict = {
        "name": sym.name,
        "type": sym.type,
        "isPrimitive": sym.is_primitive,
        "text": sym.text,
        "symbolType": sym.symbol_type,
        "decorators": [_decorator_to_dict(r) for r in sym.decorators],
    }
    if isinstance(sym, SerializedMember):
        d["typeArguments"] = sym.type_arguments
        d["isArray"] = sym.is_array
    return d


def _member_to_dict(member: SerializedMember | EnumMemberRecord) -> dict:
    if isinstance(member, EnumMemberRecord):
        return {"symbol": _symbol_to_dict(member.symbol), "value": member.value}
    return _symbol_to_dict(member)


def _entity_to_dict(entity: SerializedEntity) -> dict:
    d = _symbol_to_dict(entity)
    d["kind"] = entity.kind
    d["members"] = [_member_to_dict(m) for m in entity.members]
    return d


def results_to_data(results: list[FileResult]) -> list[dict]:
    """Convert *results* into plain JSON-ready data."""
    return [
        {
            "fileName": file_result.file_name,
            "results": [
                {
                    "root": _entity_to_dict(entry.root),
                    "dependencies": [_entity_to_dict(dep) for dep in entry.dependencies],
                }
                for entry in file_result.results
            ],
        }
        for file_result in results
    ]


def render_json(results: list[FileResult], output_path: Path | None = None) -> str:
    """Serialize *results* to JSON; also write it to *output_path* when given."""
    text = json.dumps(results_to_data(results), indent=2)
    if output_path is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n", encoding="utf-8")
    return text
