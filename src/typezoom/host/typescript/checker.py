"""Resolve TypeScript type annotations into :class:`~typezoom.model.Type` objects."""

from __future__ import annotations

from dataclasses import replace

from tree_sitter import Node

from typezoom.host.typescript.binder import BoundFile, bind_type_members, make_declaration
from typezoom.host.typescript.syntax import (
    collapse,
    first_named_child,
    has_child_of_type,
    has_token,
    named_children,
    node_text,
    string_value,
)
from typezoom.model import (
    TYPE_LITERAL_NAME,
    Declaration,
    Symbol,
    SymbolFlags,
    Type,
    TypeFlags,
)

_PROPERTY_FLAGS = SymbolFlags.PROPERTY | SymbolFlags.METHOD
_CLASS_LIKE = SymbolFlags.CLASS | SymbolFlags.INTERFACE
_PARAMETER_TYPES = {"required_parameter", "optional_parameter"}
_NULLISH = {"null", "undefined"}
_ANY_NAMES = {"any", "unknown"}
_FUNCTION_TYPES = {"function_type", "constructor_type"}
_WRAPPER_TYPES = {"parenthesized_type", "readonly_type"}


class TypeChecker:
    """Answer symbol and type queries over a set of bound files.

    Answers are computed lazily and cached, so repeated queries for a
    declaration return the very same :class:`Type` objects.  Types of
    properties inherited from an instantiated generic base are rebuilt per
    query.
    """

    def __init__(self, files: dict[str, BoundFile], lib: BoundFile) -> None:
        self._files = files
        self._lib = lib
        self._declared_types: dict[Symbol, Type] = {}
        self._static_types: dict[Symbol, Type] = {}
        self._method_types: dict[Symbol, Type] = {}
        self._property_types: dict[Declaration, Type] = {}
        self._literal_types: dict[tuple[str, int], Type] = {}
        self._type_parameters: dict[tuple[str, int], Type] = {}
        self._intrinsics: dict[str, Type] = {}
        self._base_types: dict[Symbol, list[Type]] = {}
        # Inherited properties seen through an instantiated generic base.
        self._instantiated: dict[tuple, Symbol] = {}
        self._mappers: dict[Symbol, dict[Type, Type]] = {}
        self._resolving: set[Symbol] = set()
        self._printing: set[Symbol] = set()

    # ------------------------------------------------------------------
    # TypeHost queries
    # ------------------------------------------------------------------

    def get_symbol_of_declaration(self, declaration: Declaration) -> Symbol | None:
        bound = self._files.get(declaration.file_name)
        if bound is None:
            return None
        return bound.symbols.get(declaration)

    def get_declared_type_of_symbol(self, symbol: Symbol) -> Type:
        cached = self._declared_types.get(symbol)
        if cached is not None:
            return cached

        flags = symbol.flags
        if flags & _CLASS_LIKE:
            type_ = Type(TypeFlags.OBJECT, symbol)
            type_.type_arguments = self._type_parameters_of(symbol) or None
        elif flags & SymbolFlags.REGULAR_ENUM:
            type_ = self._enum_type(symbol)
        elif flags & SymbolFlags.TYPE_ALIAS:
            type_ = self._alias_type(symbol)
        elif flags & SymbolFlags.ENUM_MEMBER and symbol.parent is not None:
            # Computing the enum type registers its member literal types.
            self.get_declared_type_of_symbol(symbol.parent)
            return self._declared_types.get(symbol) or self._error_type(symbol.name)
        else:
            return self._error_type(symbol.name)

        self._declared_types[symbol] = type_
        return type_

    def get_type_of_symbol_at_location(
        self, symbol: Symbol, declaration: Declaration
    ) -> Type:
        flags = symbol.flags
        if flags & SymbolFlags.PROPERTY:
            type_ = self._property_type(declaration)
            mapper = self._mappers.get(symbol)
            return self._instantiate(type_, mapper) if mapper else type_
        if flags & (SymbolFlags.METHOD | SymbolFlags.CONSTRUCTOR):
            return self._method_type(symbol)
        if flags & (SymbolFlags.CLASS | SymbolFlags.REGULAR_ENUM):
            return self._static_type(symbol)
        if flags & SymbolFlags.ENUM_MEMBER:
            return self.get_declared_type_of_symbol(symbol)
        return self._intrinsic("any", TypeFlags.ANY)

    def get_properties(self, type_: Type) -> list[Symbol]:
        symbol = (type_.target or type_).symbol
        if symbol is None:
            return []
        if symbol.flags & _CLASS_LIKE:
            mapper = self._type_mapper(type_, {})
            return list(self._collect_properties(symbol, frozenset(), mapper).values())
        if symbol.flags & SymbolFlags.TYPE_LITERAL:
            return [m for m in symbol.members.values() if m.flags & _PROPERTY_FLAGS]
        return []

    def get_type_arguments(self, type_: Type) -> list[Type]:
        return list(type_.type_arguments or [])

    def type_to_string(self, type_: Type) -> str:
        if type_.symbol is None and type_.flags & (TypeFlags.UNION | TypeFlags.INTERSECTION):
            sep = " | " if type_.flags & TypeFlags.UNION else " & "
            return sep.join(self.type_to_string(t) for t in type_.types)
        if type_.name:
            return type_.name

        symbol = type_.symbol
        if symbol is None:
            return "any"
        if symbol.flags & (SymbolFlags.METHOD | SymbolFlags.CONSTRUCTOR):
            decl = symbol.value_declaration or symbol.declarations[0]
            params, ret = self._signature_parts(decl)
            return f"{params} => {ret}"
        if symbol.flags & SymbolFlags.TYPE_LITERAL:
            return self._type_literal_string(symbol)

        args = type_.type_arguments
        if args and symbol.name in ("Array", "ReadonlyArray") and self._is_lib_symbol(symbol):
            element = self.type_to_string(args[0])
            if args[0].flags & (TypeFlags.UNION | TypeFlags.INTERSECTION) or " => " in element:
                element = f"({element})"
            prefix = "readonly " if symbol.name == "ReadonlyArray" else ""
            return f"{prefix}{element}[]"
        if args:
            return f"{symbol.name}<{', '.join(self.type_to_string(a) for a in args)}>"
        return symbol.name

    # ------------------------------------------------------------------
    # Declared types
    # ------------------------------------------------------------------

    def _type_parameters_of(self, symbol: Symbol) -> list[Type]:
        decl = symbol.declarations[0]
        params = decl.node.child_by_field_name("type_parameters")
        if params is None:
            return []
        return [
            self._type_parameter(decl, node)
            for node in params.named_children
            if node.type == "type_parameter"
        ]

    def _type_parameter(self, scope: Declaration, node: Node) -> Type:
        key = (scope.file_name, node.start_byte)
        cached = self._type_parameters.get(key)
        if cached is not None:
            return cached
        name_node = node.child_by_field_name("name")
        name = node_text(name_node) if name_node is not None else node_text(node)
        bound = self._files[scope.file_name]
        decl = make_declaration(bound, node, "type_parameter", name, parent=scope)
        symbol = Symbol(name, SymbolFlags.TYPE_PARAMETER, [decl])
        type_ = Type(TypeFlags.TYPE_PARAMETER, symbol, name=name)
        self._type_parameters[key] = type_
        self._declared_types[symbol] = type_
        return type_

    def _enum_type(self, symbol: Symbol) -> Type:
        enum_type = Type(TypeFlags.ENUM, symbol)
        next_value: int | float | None = 0
        for member in symbol.members.values():
            if not member.flags & SymbolFlags.ENUM_MEMBER or member.value_declaration is None:
                continue
            node = member.value_declaration.node
            initializer = node.child_by_field_name("value") if node.type == "enum_assignment" else None
            if initializer is None:
                value = next_value
            else:
                value = _evaluate_enum_initializer(initializer)
            next_value = value + 1 if isinstance(value, (int, float)) else None

            literal = Type(
                TypeFlags.ENUM_LITERAL,
                member,
                name=f"{symbol.name}.{member.name}",
                value=value,
            )
            self._declared_types[member] = literal
            enum_type.types.append(literal)
        return enum_type

    def _alias_type(self, symbol: Symbol) -> Type:
        if symbol in self._resolving:
            return self._error_type(symbol.name)
        decl = symbol.declarations[0]
        value = decl.node.child_by_field_name("value")
        if value is None:
            return self._error_type(symbol.name)
        self._resolving.add(symbol)
        try:
            return self._resolve(value, decl)
        finally:
            self._resolving.discard(symbol)

    def _static_type(self, symbol: Symbol) -> Type:
        type_ = self._static_types.get(symbol)
        if type_ is None:
            type_ = Type(TypeFlags.OBJECT, symbol, name=f"typeof {symbol.name}")
            self._static_types[symbol] = type_
        return type_

    def _method_type(self, symbol: Symbol) -> Type:
        type_ = self._method_types.get(symbol)
        if type_ is None:
            type_ = Type(TypeFlags.OBJECT, symbol)
            self._method_types[symbol] = type_
        return type_

    def _property_type(self, decl: Declaration) -> Type:
        cached = self._property_types.get(decl)
        if cached is not None:
            return cached

        node = decl.node
        if decl.kind == "getter":
            annotation = node.child_by_field_name("return_type")
        elif decl.kind == "setter":
            params = node.child_by_field_name("parameters")
            first = first_named_child(params, *_PARAMETER_TYPES) if params is not None else None
            annotation = first.child_by_field_name("type") if first is not None else None
        else:
            annotation = node.child_by_field_name("type")

        if annotation is not None:
            type_ = self._resolve_annotation(annotation, decl)
        else:
            value = node.child_by_field_name("value")
            if value is not None:
                type_ = self._infer_type(value, decl)
            else:
                type_ = self._intrinsic("any", TypeFlags.ANY)
        self._property_types[decl] = type_
        return type_

    # ------------------------------------------------------------------
    # Properties and inheritance
    # ------------------------------------------------------------------

    def _collect_properties(
        self, symbol: Symbol, visiting: frozenset[Symbol], mapper: dict[Type, Type]
    ) -> dict[str, Symbol]:
        """Own properties first, then inherited ones not overridden.

        *mapper* maps the type parameters of *symbol* to the arguments it was
        instantiated with, so ``class A extends Box<B>`` sees ``value: T`` as
        ``value: B``.
        """
        visiting = visiting | {symbol}
        result = {
            name: self._instantiated_property(member, mapper)
            for name, member in symbol.members.items()
            if member.flags & _PROPERTY_FLAGS
        }
        for base in self._base_types_of(symbol):
            base_symbol = (base.target or base).symbol
            if base_symbol is None or base_symbol in visiting:
                continue
            if base_symbol.flags & _CLASS_LIKE:
                inherited = self._collect_properties(
                    base_symbol, visiting, self._type_mapper(base, mapper)
                )
            else:
                inherited = {p.name: p for p in self.get_properties(base)}
            for name, member in inherited.items():
                result.setdefault(name, member)
        return result

    def _type_mapper(self, type_: Type, outer: dict[Type, Type]) -> dict[Type, Type]:
        """Map the type parameters of generic reference *type_* to its arguments."""
        target = type_.target
        if target is None or not type_.type_arguments or not target.type_arguments:
            return {}
        mapper: dict[Type, Type] = {}
        for param, arg in zip(target.type_arguments, type_.type_arguments):
            if not param.flags & TypeFlags.TYPE_PARAMETER:
                continue
            arg = self._instantiate(arg, outer) if outer else arg
            if arg is not param:
                mapper[param] = arg
        return mapper

    def _instantiated_property(self, member: Symbol, mapper: dict[Type, Type]) -> Symbol:
        if not mapper or not member.flags & SymbolFlags.PROPERTY:
            return member
        key = (member, *mapper.items())
        instance = self._instantiated.get(key)
        if instance is None:
            instance = replace(member)
            self._instantiated[key] = instance
            self._mappers[instance] = mapper
        return instance

    def _instantiate(self, type_: Type, mapper: dict[Type, Type]) -> Type:
        """Substitute type parameters in *type_* according to *mapper*."""
        mapped = mapper.get(type_)
        if mapped is not None:
            return mapped
        if type_.symbol is None and type_.flags & (TypeFlags.UNION | TypeFlags.INTERSECTION):
            types = [self._instantiate(t, mapper) for t in type_.types]
            if all(new is old for new, old in zip(types, type_.types)):
                return type_
            return Type(type_.flags, types=types)
        if type_.target is not None and type_.type_arguments:
            args = [self._instantiate(a, mapper) for a in type_.type_arguments]
            if all(new is old for new, old in zip(args, type_.type_arguments)):
                return type_
            return self._reference(type_.target, args)
        # Type literals keep their own members uninstantiated.
        return type_

    def _base_types_of(self, symbol: Symbol) -> list[Type]:
        cached = self._base_types.get(symbol)
        if cached is not None:
            return cached

        bases: list[Type] = []
        for decl in symbol.declarations:
            for child in decl.node.children:
                if child.type == "class_heritage":
                    for clause in child.named_children:
                        if clause.type == "extends_clause":
                            bases.extend(self._extends_clause_types(clause, decl))
                elif child.type == "extends_type_clause":
                    for type_node in named_children(child):
                        bases.append(self._resolve(type_node, decl))
        self._base_types[symbol] = bases
        return bases

    def _extends_clause_types(self, clause: Node, scope: Declaration) -> list[Type]:
        """Base types of a class ``extends`` clause, ``Base<Args>`` instantiated."""
        bases: list[Type] = []
        for child in named_children(clause):
            if child.type == "type_arguments":
                if bases:
                    bases[-1] = self._reference(bases[-1], self._resolve_arguments(child, scope))
                continue
            if child.type == "instantiation_expression":
                expression = next(iter(named_children(child)), None)
                args_node = child.child_by_field_name("type_arguments")
                if expression is None:
                    continue
                base = self._resolve_expression_type(expression, scope)
                if args_node is not None:
                    base = self._reference(base, self._resolve_arguments(args_node, scope))
                bases.append(base)
                continue
            bases.append(self._resolve_expression_type(child, scope))
        return bases

    def _resolve_expression_type(self, node: Node, scope: Declaration) -> Type:
        """Resolve an `extends` expression (`Base` or `ns.Base`) to a type."""
        if node.type == "identifier":
            return self._resolve_type_name(node_text(node), scope)
        if node.type == "member_expression":
            obj = node.child_by_field_name("object")
            prop = node.child_by_field_name("property")
            if obj is not None and prop is not None and obj.type == "identifier":
                return self._resolve_qualified_name(
                    node_text(obj), node_text(prop), node_text(node), scope
                )
        return self._error_type(node_text(node))

    # ------------------------------------------------------------------
    # Type nodes
    # ------------------------------------------------------------------

    def _resolve_annotation(self, node: Node, scope: Declaration) -> Type:
        if node.type == "type_annotation":
            inner = next(iter(named_children(node)), None)
            if inner is None:
                return self._intrinsic("any", TypeFlags.ANY)
            return self._resolve(inner, scope)
        if node.type == "type_predicate_annotation":
            return self._intrinsic("boolean", TypeFlags.PRIMITIVE)
        if node.type == "asserts_annotation":
            return self._intrinsic("void", TypeFlags.PRIMITIVE)
        return self._resolve(node, scope)

    def _resolve(self, node: Node, scope: Declaration) -> Type:
        kind = node.type
        if kind == "predefined_type":
            name = node_text(node)
            flags = TypeFlags.ANY if name in _ANY_NAMES else TypeFlags.PRIMITIVE
            return self._intrinsic(name, flags)
        if kind == "literal_type":
            return self._intrinsic(node_text(node), TypeFlags.LITERAL)
        if kind in _WRAPPER_TYPES:
            inner = next(iter(named_children(node)), None)
            return self._resolve(inner, scope) if inner is not None else self._intrinsic("any", TypeFlags.ANY)
        if kind == "type_identifier":
            return self._resolve_type_name(node_text(node), scope)
        if kind == "nested_type_identifier":
            module = node.child_by_field_name("module")
            name = node.child_by_field_name("name")
            if module is not None and name is not None:
                return self._resolve_qualified_name(
                    node_text(module), node_text(name), node_text(node), scope
                )
            return self._error_type(node_text(node))
        if kind == "generic_type":
            return self._resolve_generic(node, scope)
        if kind == "array_type":
            element = next(iter(named_children(node)), None)
            element_type = self._resolve(element, scope) if element is not None else self._intrinsic("any", TypeFlags.ANY)
            return self._reference(self._lib_type("Array"), [element_type])
        if kind == "union_type":
            return self._resolve_composite(node, scope, TypeFlags.UNION)
        if kind == "intersection_type":
            return self._resolve_composite(node, scope, TypeFlags.INTERSECTION)
        if kind == "object_type" or kind in _FUNCTION_TYPES:
            return self._type_literal(node, scope)
        if kind == "this_type":
            return self._this_type(scope)
        # Tuples, `typeof x`, `keyof T`, conditional, mapped and template
        # literal types carry no nameable entity.
        return Type(TypeFlags.OBJECT, name=collapse(node_text(node)))

    def _resolve_type_name(self, name: str, scope: Declaration) -> Type:
        type_parameter = self._lookup_type_parameter(name, scope)
        if type_parameter is not None:
            return type_parameter
        symbol = self._resolve_name(self._files[scope.file_name], name, set())
        if symbol is None:
            return self._error_type(name)
        return self.get_declared_type_of_symbol(symbol)

    def _resolve_qualified_name(
        self, qualifier: str, name: str, text: str, scope: Declaration
    ) -> Type:
        """Resolve ``ns.Name`` (namespace import) or ``Enum.Member``."""
        bound = self._files[scope.file_name]
        binding = bound.imports.get(qualifier)
        if binding is not None and binding.name is None:
            target = self._module_file(bound, binding.specifier)
            symbol = self._resolve_export(target, name, set()) if target is not None else None
            if symbol is not None:
                return self.get_declared_type_of_symbol(symbol)
            return self._error_type(text)

        owner = self._resolve_name(bound, qualifier, set())
        if owner is not None and owner.flags & SymbolFlags.REGULAR_ENUM:
            member = owner.members.get(name)
            if member is not None:
                return self.get_declared_type_of_symbol(member)
        return self._error_type(text)

    def _resolve_generic(self, node: Node, scope: Declaration) -> Type:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return self._error_type(node_text(node))
        target = self._resolve(name_node, scope)
        args_node = node.child_by_field_name("type_arguments")
        args = self._resolve_arguments(args_node, scope) if args_node is not None else []
        return self._reference(target, args)

    def _resolve_arguments(self, node: Node, scope: Declaration) -> list[Type]:
        return [self._resolve(arg, scope) for arg in named_children(node)]

    def _reference(self, target: Type, args: list[Type]) -> Type:
        """Instantiate generic *target* with *args*."""
        if target.flags & TypeFlags.ERROR or target.symbol is None:
            return target
        return Type(target.flags, target.symbol, target=target, type_arguments=args)

    def _resolve_composite(self, node: Node, scope: Declaration, flag: TypeFlags) -> Type:
        members: list[Type] = []
        self._flatten(node, scope, flag, members)

        unique: list[Type] = []
        for member in members:
            if not any(member is seen for seen in unique):
                unique.append(member)
        if flag is TypeFlags.UNION:
            # Without strict null checks `null` and `undefined` are absorbed.
            non_null = [t for t in unique if t.symbol is not None or t.name not in _NULLISH]
            if non_null:
                unique = non_null
        if len(unique) == 1:
            return unique[0]
        return Type(flag, types=unique)

    def _flatten(self, node: Node, scope: Declaration, flag: TypeFlags, out: list[Type]) -> None:
        for child in named_children(node):
            if child.type == node.type:
                self._flatten(child, scope, flag, out)
                continue
            type_ = self._resolve(child, scope)
            if type_.symbol is None and type_.flags & flag:
                out.extend(type_.types)
            else:
                out.append(type_)

    def _type_literal(self, node: Node, scope: Declaration) -> Type:
        key = (scope.file_name, node.start_byte)
        cached = self._literal_types.get(key)
        if cached is not None:
            return cached

        bound = self._files[scope.file_name]
        decl = make_declaration(bound, node, "type_literal", TYPE_LITERAL_NAME, parent=scope)
        symbol = Symbol(TYPE_LITERAL_NAME, SymbolFlags.TYPE_LITERAL, [decl])
        bound.symbols[decl] = symbol
        if node.type == "object_type":
            bind_type_members(bound, node, decl, symbol)
            type_ = Type(TypeFlags.OBJECT, symbol)
        else:
            type_ = Type(TypeFlags.OBJECT, symbol, name=collapse(node_text(node)))
        self._literal_types[key] = type_
        self._declared_types[symbol] = type_
        return type_

    def _this_type(self, scope: Declaration | None) -> Type:
        decl = scope
        while decl is not None:
            if decl.kind in ("class", "interface"):
                symbol = self.get_symbol_of_declaration(decl)
                if symbol is not None:
                    return self.get_declared_type_of_symbol(symbol)
            decl = decl.parent
        return self._intrinsic("any", TypeFlags.ANY)

    def _infer_type(self, value: Node, scope: Declaration) -> Type:
        """Widened type of a property initializer."""
        kind = value.type
        if kind in ("string", "template_string"):
            return self._intrinsic("string", TypeFlags.PRIMITIVE)
        if kind == "number" or (kind == "unary_expression" and has_child_of_type(value, "number")):
            return self._intrinsic("number", TypeFlags.PRIMITIVE)
        if kind in ("true", "false"):
            return self._intrinsic("boolean", TypeFlags.PRIMITIVE)

        bound = self._files[scope.file_name]
        if kind == "new_expression":
            ctor = value.child_by_field_name("constructor")
            if ctor is not None and ctor.type == "identifier":
                symbol = self._resolve_name(bound, node_text(ctor), set())
                if symbol is not None and symbol.flags & SymbolFlags.CLASS:
                    return self.get_declared_type_of_symbol(symbol)
        elif kind == "member_expression":
            obj = value.child_by_field_name("object")
            prop = value.child_by_field_name("property")
            if obj is not None and prop is not None and obj.type == "identifier":
                owner = self._resolve_name(bound, node_text(obj), set())
                if (
                    owner is not None
                    and owner.flags & SymbolFlags.REGULAR_ENUM
                    and node_text(prop) in owner.members
                ):
                    return self.get_declared_type_of_symbol(owner)
        return self._intrinsic("any", TypeFlags.ANY)

    # ------------------------------------------------------------------
    # Name resolution
    # ------------------------------------------------------------------

    def _lookup_type_parameter(self, name: str, scope: Declaration | None) -> Type | None:
        decl = scope
        while decl is not None:
            params = decl.node.child_by_field_name("type_parameters") if decl.node is not None else None
            if params is not None:
                for node in params.named_children:
                    if node.type != "type_parameter":
                        continue
                    name_node = node.child_by_field_name("name")
                    if name_node is not None and node_text(name_node) == name:
                        return self._type_parameter(decl, node)
            decl = decl.parent
        return None

    def _resolve_name(
        self, bound: BoundFile, name: str, seen: set[tuple[str, str]]
    ) -> Symbol | None:
        """Resolve a type name through locals, imports and the built-in library."""
        symbol = bound.locals.get(name)
        if symbol is not None:
            return symbol
        binding = bound.imports.get(name)
        if binding is not None:
            if binding.name is None:
                return None
            target = self._module_file(bound, binding.specifier)
            if target is None:
                return None
            return self._resolve_export(target, binding.name, seen)
        if bound is not self._lib:
            return self._lib.locals.get(name)
        return None

    def _resolve_export(
        self, bound: BoundFile, name: str, seen: set[tuple[str, str]]
    ) -> Symbol | None:
        key = (bound.file_name, name)
        if key in seen:
            return None
        seen.add(key)

        local = bound.exports.get(name)
        if local is not None:
            return self._resolve_name(bound, local, seen)
        reexport = bound.reexports.get(name)
        if reexport is not None:
            target = self._module_file(bound, reexport[0])
            return self._resolve_export(target, reexport[1], seen) if target is not None else None
        if name != "default":
            for specifier in bound.star_exports:
                target = self._module_file(bound, specifier)
                if target is None:
                    continue
                symbol = self._resolve_export(target, name, seen)
                if symbol is not None:
                    return symbol
        return None

    def _module_file(self, bound: BoundFile, specifier: str) -> BoundFile | None:
        file_name = bound.resolved_modules.get(specifier)
        if file_name is None:
            return None
        return self._files.get(file_name)

    def _lib_type(self, name: str) -> Type:
        symbol = self._lib.locals.get(name)
        if symbol is None:
            return self._error_type(name)
        return self.get_declared_type_of_symbol(symbol)

    def _is_lib_symbol(self, symbol: Symbol) -> bool:
        return self._lib.locals.get(symbol.name) is symbol

    # ------------------------------------------------------------------
    # Printing helpers
    # ------------------------------------------------------------------

    def _signature_parts(self, decl: Declaration) -> tuple[str, str]:
        node = decl.node
        params_node = node.child_by_field_name("parameters")
        params: list[str] = []
        for param in named_children(params_node) if params_node is not None else []:
            if param.type not in _PARAMETER_TYPES:
                continue
            pattern = param.child_by_field_name("pattern")
            name = node_text(pattern) if pattern is not None else "_"
            optional = "?" if param.type == "optional_parameter" else ""
            annotation = param.child_by_field_name("type")
            type_text = (
                self.type_to_string(self._resolve_annotation(annotation, decl))
                if annotation is not None
                else "any"
            )
            params.append(f"{name}{optional}: {type_text}")

        return_node = node.child_by_field_name("return_type")
        ret = (
            self.type_to_string(self._resolve_annotation(return_node, decl))
            if return_node is not None
            else "any"
        )
        return f"({', '.join(params)})", ret

    def _type_literal_string(self, symbol: Symbol) -> str:
        if symbol in self._printing:
            return "..."
        self._printing.add(symbol)
        try:
            parts: list[str] = []
            for member in symbol.members.values():
                decl = member.value_declaration or member.declarations[0]
                if member.flags & SymbolFlags.PROPERTY:
                    optional = "?" if has_token(decl.node, "?") else ""
                    type_text = self.type_to_string(self._property_type(decl))
                    parts.append(f"{member.name}{optional}: {type_text}")
                elif member.flags & SymbolFlags.METHOD:
                    params, ret = self._signature_parts(decl)
                    parts.append(f"{member.name}{params}: {ret}")
                else:
                    parts.append(collapse(decl.text).rstrip(";,"))
        finally:
            self._printing.discard(symbol)
        if not parts:
            return "{}"
        return "{ " + "; ".join(parts) + "; }"

    # ------------------------------------------------------------------
    # Intrinsics
    # ------------------------------------------------------------------

    def _intrinsic(self, name: str, flags: TypeFlags) -> Type:
        type_ = self._intrinsics.get(name)
        if type_ is None:
            type_ = Type(flags, name=name)
            self._intrinsics[name] = type_
        return type_

    def _error_type(self, text: str) -> Type:
        return Type(TypeFlags.ERROR, name=text)


def _evaluate_enum_initializer(node: Node) -> str | int | float | None:
    """Constant-fold an enum member initializer; computed members yield None."""
    if node.type == "number":
        return _parse_number(node_text(node))
    if node.type == "string":
        return string_value(node)
    if node.type == "parenthesized_expression":
        inner = next(iter(named_children(node)), None)
        return _evaluate_enum_initializer(inner) if inner is not None else None
    if node.type == "unary_expression":
        operand = node.child_by_field_name("argument")
        operator = node.child_by_field_name("operator")
        if operand is not None and operator is not None:
            value = _evaluate_enum_initializer(operand)
            if isinstance(value, (int, float)):
                op = node_text(operator)
                if op == "-":
                    return -value
                if op == "+":
                    return value
    return None


def _parse_number(text: str) -> int | float | None:
    text = text.replace("_", "")
    try:
        return int(text, 0)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    return int(value) if value.is_integer() else value
