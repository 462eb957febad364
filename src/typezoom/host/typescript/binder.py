"""Bind top-level TypeScript declarations and their members to symbols."""

from __future__ import annotations

from dataclasses import dataclass, field

from tree_sitter import Node, Tree

from typezoom.host.typescript.syntax import (
    has_token,
    named_children,
    node_text,
    property_name,
    string_value,
)
from typezoom.model import (
    CONSTRUCTOR_MEMBER,
    NUMBER_INDEX_MEMBER,
    STRING_INDEX_MEMBER,
    Declaration,
    Symbol,
    SymbolFlags,
)

# tree-sitter node types of top-level declarations we bind, and their kind.
_DECLARATION_KINDS = {
    "class_declaration": "class",
    "abstract_class_declaration": "class",
    "class": "class",  # `export default class Foo {}` parsed as an expression
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "type_alias_declaration": "type_alias",
}

_PARAMETER_TYPES = {"required_parameter", "optional_parameter"}


@dataclass
class ImportBinding:
    """A local name bound by an import statement."""

    specifier: str
    name: str | None  # exported name; None for `import * as ns`


@dataclass(eq=False)
class BoundFile:
    """Symbols, imports and exports of one parsed file."""

    file_name: str
    source: bytes
    tree: Tree
    is_declaration_file: bool
    locals: dict[str, Symbol] = field(default_factory=dict)
    imports: dict[str, ImportBinding] = field(default_factory=dict)
    exports: dict[str, str] = field(default_factory=dict)
    reexports: dict[str, tuple[str, str]] = field(default_factory=dict)
    star_exports: list[str] = field(default_factory=list)
    declarations: list[Declaration] = field(default_factory=list)
    symbols: dict[Declaration, Symbol] = field(default_factory=dict)
    module_specifiers: list[str] = field(default_factory=list)
    resolved_modules: dict[str, str | None] = field(default_factory=dict)


def bind_file(
    file_name: str, source: bytes, tree: Tree, is_declaration_file: bool
) -> BoundFile:
    """Walk the top-level statements of *tree* and bind them."""
    bound = BoundFile(
        file_name=file_name,
        source=source,
        tree=tree,
        is_declaration_file=is_declaration_file,
    )
    for node in named_children(tree.root_node):
        _bind_statement(bound, node)
    return bound


def make_declaration(
    bound: BoundFile,
    node: Node,
    kind: str,
    name: str | None,
    *,
    parent: Declaration | None = None,
    decorators: list[Node] | None = None,
    span: Node | None = None,
) -> Declaration:
    """Create a declaration for *node*; *span* widens the recorded text range."""
    start = (span or node).start_byte
    end = max(node.end_byte, (span or node).end_byte)
    return Declaration(
        kind=kind,
        name=name,
        file_name=bound.file_name,
        pos=start,
        end=end,
        text=bound.source[start:end].decode("utf-8"),
        node=node,
        decorators=list(decorators or []),
        parent=parent,
    )


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


def _bind_statement(
    bound: BoundFile,
    node: Node,
    decorators: list[Node] | None = None,
    wrapper: Node | None = None,
) -> Symbol | None:
    if node.type == "export_statement":
        _bind_export(bound, node)
    elif node.type == "import_statement":
        _bind_import(bound, node)
    elif node.type == "ambient_declaration":
        for child in named_children(node):
            symbol = _bind_statement(bound, child, decorators, wrapper or node)
            if symbol is not None:
                return symbol
    elif node.type in _DECLARATION_KINDS:
        return _bind_declaration(bound, node, decorators, wrapper)
    return None


def _bind_import(bound: BoundFile, node: Node) -> None:
    source = node.child_by_field_name("source")
    if source is None:
        return
    specifier = string_value(source)
    bound.module_specifiers.append(specifier)

    clause = next((c for c in node.named_children if c.type == "import_clause"), None)
    if clause is None:
        return
    for child in clause.named_children:
        if child.type == "identifier":
            bound.imports[node_text(child)] = ImportBinding(specifier, "default")
        elif child.type == "namespace_import":
            ident = next((c for c in child.named_children if c.type == "identifier"), None)
            if ident is not None:
                bound.imports[node_text(ident)] = ImportBinding(specifier, None)
        elif child.type == "named_imports":
            for spec in child.named_children:
                if spec.type != "import_specifier":
                    continue
                name_node = spec.child_by_field_name("name")
                alias_node = spec.child_by_field_name("alias")
                if name_node is None:
                    continue
                name = property_name(name_node)
                local = node_text(alias_node) if alias_node is not None else name
                bound.imports[local] = ImportBinding(specifier, name)


def _bind_export(bound: BoundFile, node: Node) -> None:
    decorators = node.children_by_field_name("decorator")
    is_default = has_token(node, "default")

    declaration = node.child_by_field_name("declaration")
    if declaration is not None:
        symbol = _bind_statement(bound, declaration, decorators, node)
        if symbol is not None:
            bound.exports["default" if is_default else symbol.name] = symbol.name
        return

    value = node.child_by_field_name("value")
    if value is not None:
        if value.type == "identifier":
            bound.exports["default"] = node_text(value)
        elif value.type == "class" and value.child_by_field_name("name") is not None:
            symbol = _bind_declaration(bound, value, decorators, node)
            if symbol is not None:
                bound.exports["default"] = symbol.name
        return

    source = node.child_by_field_name("source")
    specifier = string_value(source) if source is not None else None
    if specifier is not None:
        bound.module_specifiers.append(specifier)

    clause = next((c for c in node.named_children if c.type == "export_clause"), None)
    if clause is None:
        # `export * from "./m"`; `export * as ns from` only binds a value.
        is_namespace = any(c.type == "namespace_export" for c in node.named_children)
        if specifier is not None and not is_namespace and has_token(node, "*"):
            bound.star_exports.append(specifier)
        return

    for spec in clause.named_children:
        if spec.type != "export_specifier":
            continue
        name_node = spec.child_by_field_name("name")
        if name_node is None:
            continue
        name = property_name(name_node)
        alias_node = spec.child_by_field_name("alias")
        exported = property_name(alias_node) if alias_node is not None else name
        if specifier is not None:
            bound.reexports[exported] = (specifier, name)
        else:
            bound.exports[exported] = name


def _bind_declaration(
    bound: BoundFile,
    node: Node,
    decorators: list[Node] | None,
    wrapper: Node | None,
) -> Symbol | None:
    kind = _DECLARATION_KINDS[node.type]
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None
    name = node_text(name_node)
    all_decorators = list(decorators or []) + node.children_by_field_name("decorator")
    decl = make_declaration(
        bound, node, kind, name, decorators=all_decorators, span=wrapper
    )

    if kind == "class":
        symbol = Symbol(name, SymbolFlags.CLASS, [decl], value_declaration=decl)
        _bind_class_members(bound, node, decl, symbol)
    elif kind == "interface":
        existing = bound.locals.get(name)
        if existing is not None and existing.flags & SymbolFlags.INTERFACE:
            # Declaration merging.
            symbol = existing
            symbol.declarations.append(decl)
        else:
            symbol = Symbol(name, SymbolFlags.INTERFACE, [decl])
        body = node.child_by_field_name("body")
        if body is not None:
            bind_type_members(bound, body, decl, symbol)
    elif kind == "enum":
        symbol = Symbol(name, SymbolFlags.REGULAR_ENUM, [decl], value_declaration=decl)
        _bind_enum_members(bound, node, decl, symbol)
    else:
        symbol = Symbol(name, SymbolFlags.TYPE_ALIAS, [decl])

    bound.locals[name] = symbol
    bound.declarations.append(decl)
    bound.symbols[decl] = symbol
    return symbol


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


def _add_member(
    bound: BoundFile,
    owner: Symbol,
    name: str,
    flags: SymbolFlags,
    decl: Declaration,
    has_value: bool = True,
) -> Symbol:
    """Add (or merge into) member *name* of *owner*."""
    member = owner.members.get(name)
    if member is not None and member.flags & flags:
        # Overloads and get/set pairs share one symbol; the first wins.
        member.declarations.append(decl)
        if member.value_declaration is None and has_value:
            member.value_declaration = decl
    else:
        member = Symbol(
            name,
            flags,
            [decl],
            value_declaration=decl if has_value else None,
            parent=owner,
        )
        owner.members[name] = member
    bound.symbols[decl] = member
    return member


def _bind_class_members(
    bound: BoundFile, node: Node, class_decl: Declaration, symbol: Symbol
) -> None:
    body = node.child_by_field_name("body")
    if body is None:
        return

    # Method decorators are siblings that precede the method in the body.
    pending: list[Node] = []
    for child in named_children(body):
        if child.type == "decorator":
            pending.append(child)
            continue
        decorators = pending + child.children_by_field_name("decorator")
        span = pending[0] if pending else None
        pending = []
        # Static members belong to the constructor, not to instances.
        if has_token(child, "static"):
            continue

        if child.type == "public_field_definition":
            name = property_name(child.child_by_field_name("name"))
            if name is None:
                continue
            decl = make_declaration(
                bound, child, "property", name,
                parent=class_decl, decorators=decorators, span=span,
            )
            _add_member(bound, symbol, name, SymbolFlags.PROPERTY, decl)
        elif child.type in ("method_definition", "method_signature", "abstract_method_signature"):
            _bind_method(bound, child, class_decl, symbol, decorators, span)
        elif child.type == "index_signature":
            _bind_index_signature(bound, child, class_decl, symbol)


def _bind_method(
    bound: BoundFile,
    node: Node,
    parent: Declaration,
    owner: Symbol,
    decorators: list[Node],
    span: Node | None,
) -> None:
    name = property_name(node.child_by_field_name("name"))
    if name is None:
        return

    if name == "constructor" and node.type == "method_definition":
        decl = make_declaration(
            bound, node, "constructor", name,
            parent=parent, decorators=decorators, span=span,
        )
        _add_member(bound, owner, CONSTRUCTOR_MEMBER, SymbolFlags.CONSTRUCTOR, decl, has_value=False)
        _bind_parameter_properties(bound, node, parent, owner)
        return

    if has_token(node, "get") or has_token(node, "set"):
        kind = "getter" if has_token(node, "get") else "setter"
        decl = make_declaration(
            bound, node, kind, name, parent=parent, decorators=decorators, span=span
        )
        _add_member(bound, owner, name, SymbolFlags.PROPERTY, decl)
        return

    decl = make_declaration(
        bound, node, "method", name, parent=parent, decorators=decorators, span=span
    )
    _add_member(bound, owner, name, SymbolFlags.METHOD, decl)


def _bind_parameter_properties(
    bound: BoundFile, ctor: Node, class_decl: Declaration, owner: Symbol
) -> None:
    """Bind `constructor(private a: A)` parameters as properties."""
    params = ctor.child_by_field_name("parameters")
    if params is None:
        return
    for param in params.named_children:
        if param.type not in _PARAMETER_TYPES:
            continue
        is_property = any(
            c.type == "accessibility_modifier" for c in param.named_children
        ) or has_token(param, "readonly")
        pattern = param.child_by_field_name("pattern")
        if not is_property or pattern is None or pattern.type != "identifier":
            continue
        name = node_text(pattern)
        decl = make_declaration(
            bound, param, "parameter", name,
            parent=class_decl, decorators=param.children_by_field_name("decorator"),
        )
        _add_member(bound, owner, name, SymbolFlags.PROPERTY, decl)


def _bind_index_signature(
    bound: BoundFile, node: Node, parent: Declaration, owner: Symbol
) -> None:
    index_type = node.child_by_field_name("index_type")
    if index_type is None:
        return  # mapped type clause
    name = NUMBER_INDEX_MEMBER if node_text(index_type) == "number" else STRING_INDEX_MEMBER
    decl = make_declaration(bound, node, "index_signature", name, parent=parent)
    _add_member(bound, owner, name, SymbolFlags.INDEX_SIGNATURE, decl, has_value=False)


def bind_type_members(
    bound: BoundFile, body: Node, parent: Declaration, owner: Symbol
) -> None:
    """Bind the members of an interface body or an object type literal."""
    for child in named_children(body):
        if child.type == "property_signature":
            name = property_name(child.child_by_field_name("name"))
            if name is None:
                continue
            decl = make_declaration(bound, child, "property", name, parent=parent)
            _add_member(bound, owner, name, SymbolFlags.PROPERTY, decl)
        elif child.type == "method_signature":
            _bind_method(bound, child, parent, owner, [], None)
        elif child.type == "index_signature":
            _bind_index_signature(bound, child, parent, owner)


def _bind_enum_members(
    bound: BoundFile, node: Node, enum_decl: Declaration, owner: Symbol
) -> None:
    body = node.child_by_field_name("body")
    if body is None:
        return
    for child in named_children(body):
        if child.type == "enum_assignment":
            name_node = child.child_by_field_name("name")
        elif child.type in ("property_identifier", "string", "number"):
            name_node = child
        else:
            continue
        name = property_name(name_node)
        if name is None:
            continue
        decl = make_declaration(bound, child, "enum_member", name, parent=enum_decl)
        _add_member(bound, owner, name, SymbolFlags.ENUM_MEMBER, decl)
