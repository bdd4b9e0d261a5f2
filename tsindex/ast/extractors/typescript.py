"""
TypeScript Declaration Extractor

Normalizes the exported top-level declarations of a TypeScript source file
into ExtractedDeclaration records using tree-sitter.

Handles interfaces, type aliases, enums, functions, classes, variables,
namespaces and re-exports. Only exported declarations are emitted.
"""

from dataclasses import dataclass, field
from typing import Iterator, NamedTuple, Optional

from tree_sitter import Node, Tree

from tsindex.ast.extractors.base import LanguageExtractor, register_extractor
from tsindex.ast.jsdoc import DocExtractor, extract_jsdoc
from tsindex.ast.models import (
    DECLARATION_KINDS,
    ClassDecl,
    EnumDecl,
    ExtractedDeclaration,
    FunctionDecl,
    InterfaceDecl,
    NamespaceDecl,
    PropertyInfo,
    ReExportDecl,
    TypeAliasDecl,
    TypeParameter,
    VariableDecl,
)
from tsindex.ast.types import (
    annotation_text,
    extract_parameters,
    format_number,
    infer_return_type,
    infer_type,
    simplify_type,
    string_content,
    truncate_value,
)
from tsindex.configs.constants import ENUM_PREVIEW_MEMBERS

INTERFACE_TYPES = {"interface_declaration"}
TYPE_ALIAS_TYPES = {"type_alias_declaration"}
ENUM_TYPES = {"enum_declaration"}
FUNCTION_TYPES = {
    "function_declaration",
    "generator_function_declaration",
    "function_signature",
    "function_expression",
    "function",
    "generator_function",
}
CLASS_TYPES = {"class_declaration", "abstract_class_declaration", "class"}
VARIABLE_TYPES = {"lexical_declaration", "variable_declaration"}
NAMESPACE_TYPES = {"internal_module", "module"}

DECLARATION_NODE_TYPES = (
    INTERFACE_TYPES
    | TYPE_ALIAS_TYPES
    | ENUM_TYPES
    | FUNCTION_TYPES
    | CLASS_TYPES
    | VARIABLE_TYPES
    | NAMESPACE_TYPES
)

# Expressions that `export default` turns into named declarations
DEFAULT_EXPORT_VALUE_TYPES = {"function_expression", "function", "generator_function", "class"}

# Namespace member labels, in the order they are listed
NAMESPACE_MEMBER_LABELS = {
    "interface_declaration": "interface",
    "type_alias_declaration": "type",
    "enum_declaration": "enum",
    "function_declaration": "function",
    "generator_function_declaration": "function",
    "function_signature": "function",
    "class_declaration": "class",
    "abstract_class_declaration": "class",
    "internal_module": "namespace",
    "module": "namespace",
}
NAMESPACE_MEMBER_ORDER = ("interface", "type", "enum", "function", "class", "namespace")

NON_PUBLIC_SCOPES = {"private", "protected"}


class _ExportTarget(NamedTuple):
    node: Node  # The declaration (or re-export statement)
    anchor: Node  # Statement carrying docs and line number
    names: Optional[set[str]] = None  # Restricts variable declarators
    ambient: bool = False


@dataclass
class _FileContext:
    file: str
    module: str
    source: bytes
    implemented_functions: set[str] = field(default_factory=set)
    emitted_signatures: set[str] = field(default_factory=set)


class TypeScriptExtractor(LanguageExtractor):
    """Extracts exported declarations from TypeScript source files."""

    def __init__(self, doc_extractor: Optional[DocExtractor] = None):
        self.doc_extractor = doc_extractor or extract_jsdoc

    @property
    def language(self) -> str:
        return "typescript"

    @property
    def dialects(self) -> tuple[str, ...]:
        return ("typescript", "tsx")

    def extract_declarations(
        self,
        tree: Tree,
        source: bytes,
        file_path: str,
        module: str,
    ) -> list[ExtractedDeclaration]:
        """Extract exported declarations, grouped by kind in DECLARATION_KINDS order."""
        ctx = _FileContext(file=file_path, module=module, source=source)
        targets = list(self._exported_targets(tree.root_node, source))

        # Overload signatures only count when there is no implementation
        for target in targets:
            if target.node.type == "function_declaration":
                name_node = target.node.child_by_field_name("name")
                if name_node is not None:
                    ctx.implemented_functions.add(self.get_node_text(name_node, source))

        records: list[ExtractedDeclaration] = []
        for target in targets:
            records.extend(self._normalize(target, ctx))

        order = {kind: i for i, kind in enumerate(DECLARATION_KINDS)}
        records.sort(key=lambda r: order[r.kind])
        return records

    # -------------------------------------------------------------------------
    # Export detection
    # -------------------------------------------------------------------------

    def _exported_targets(self, root: Node, source: bytes) -> Iterator[_ExportTarget]:
        """Yield every exported top-level declaration and re-export clause."""
        local_names = self._local_export_names(root, source)

        for stmt in root.named_children:
            if stmt.type == "export_statement":
                if stmt.child_by_field_name("source") is not None:
                    yield _ExportTarget(stmt, stmt)
                    continue

                decl = stmt.child_by_field_name("declaration")
                if decl is not None:
                    inner = self._unwrap(decl)
                    if inner is not None:
                        yield _ExportTarget(inner, stmt, ambient=decl.type == "ambient_declaration")
                    continue

                value = stmt.child_by_field_name("value")
                if value is not None and value.type in DEFAULT_EXPORT_VALUE_TYPES:
                    yield _ExportTarget(value, stmt)

            elif local_names:
                # `const a = 1; export { a }` exports `a` too
                inner = self._unwrap(stmt)
                if inner is None:
                    continue
                names = set(self._declared_names(inner, source)) & local_names
                if names:
                    yield _ExportTarget(inner, stmt, names, ambient=stmt.type == "ambient_declaration")

    def _local_export_names(self, root: Node, source: bytes) -> set[str]:
        """Names exported by `export { a, b }` (no source) and `export default a`."""
        names = set()
        for stmt in root.named_children:
            if stmt.type != "export_statement" or stmt.child_by_field_name("source") is not None:
                continue
            clause = self.find_child(stmt, "export_clause")
            if clause is not None:
                for spec in clause.named_children:
                    if spec.type != "export_specifier":
                        continue
                    name_node = spec.child_by_field_name("name")
                    if name_node is not None:
                        names.add(self.get_node_text(name_node, source))
            value = stmt.child_by_field_name("value")
            if value is not None and value.type == "identifier":
                names.add(self.get_node_text(value, source))
        return names

    def _unwrap(self, node: Node) -> Optional[Node]:
        """Strip `declare` and expression wrappers down to the declaration node."""
        if node.type == "ambient_declaration":
            for child in node.named_children:
                if child.type in DECLARATION_NODE_TYPES:
                    return child
            return None
        if node.type == "expression_statement":
            for child in node.named_children:
                if child.type in NAMESPACE_TYPES:
                    return child
            return None
        if node.type in DECLARATION_NODE_TYPES:
            return node
        return None

    def _declared_names(self, node: Node, source: bytes) -> list[str]:
        if node.type in VARIABLE_TYPES:
            names = []
            for declarator in node.named_children:
                if declarator.type != "variable_declarator":
                    continue
                name_node = declarator.child_by_field_name("name")
                if name_node is not None:
                    names.append(self.get_node_text(name_node, source))
            return names
        name_node = node.child_by_field_name("name")
        return [self.get_node_text(name_node, source)] if name_node is not None else []

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _normalize(self, target: _ExportTarget, ctx: _FileContext) -> list[ExtractedDeclaration]:
        node_type = target.node.type

        if node_type == "export_statement":
            record = self._extract_re_export(target, ctx)
        elif node_type in INTERFACE_TYPES:
            record = self._extract_interface(target, ctx)
        elif node_type in TYPE_ALIAS_TYPES:
            record = self._extract_type_alias(target, ctx)
        elif node_type in ENUM_TYPES:
            record = self._extract_enum(target, ctx)
        elif node_type in FUNCTION_TYPES:
            record = self._extract_function(target, ctx)
        elif node_type in CLASS_TYPES:
            record = self._extract_class(target, ctx)
        elif node_type in VARIABLE_TYPES:
            return self._extract_variables(target, ctx)
        elif node_type in NAMESPACE_TYPES:
            record = self._extract_namespace(target, ctx)
        else:
            record = None

        return [record] if record is not None else []

    def _name(self, node: Node, source: bytes) -> Optional[str]:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        return self.get_node_text(name_node, source)

    def _docs(self, node: Node, source: bytes) -> Optional[str]:
        return self.doc_extractor(node, source)

    # -------------------------------------------------------------------------
    # Shared pieces
    # -------------------------------------------------------------------------

    def _extract_type_parameters(self, node: Node, source: bytes) -> list[TypeParameter]:
        """Extract `<T extends X = Y>` parameters of a declaration."""
        params_node = node.child_by_field_name("type_parameters")
        if params_node is None:
            return []

        params = []
        for child in params_node.named_children:
            if child.type != "type_parameter":
                continue
            name_node = child.child_by_field_name("name")
            if name_node is None:
                continue
            params.append(TypeParameter(
                name=self.get_node_text(name_node, source),
                constraint=self._clause_type(self.find_child(child, "constraint"), source),
                default=self._clause_type(self.find_child(child, "default_type"), source),
            ))
        return params

    def _clause_type(self, node: Optional[Node], source: bytes) -> Optional[str]:
        """Type text of a `extends X` / `= X` clause node."""
        if node is None or not node.named_children:
            return None
        return self.get_node_text(node.named_children[0], source)

    def _type_params_suffix(self, params: list[TypeParameter]) -> str:
        if not params:
            return ""
        return f"<{', '.join(p.name for p in params)}>"

    def _method_info(
        self,
        member: Node,
        source: bytes,
        name: str,
        is_call_signature: bool = False,
    ) -> PropertyInfo:
        """PropertyInfo for a method, method signature, or call signature."""
        params_node = member.child_by_field_name("parameters")
        params = extract_parameters(params_node, source) if params_node is not None else []
        return_type = simplify_type(infer_return_type(member, source))

        return PropertyInfo(
            name=name,
            type=return_type,
            optional=False if is_call_signature else self.has_token(member, "?"),
            readonly=False,
            docs=self._docs(member, source),
            is_method=not is_call_signature,
            is_call_signature=is_call_signature,
            is_index_signature=False,
            parameters=[p.render() for p in params],
            return_type=return_type,
        )

    def _index_signature_info(self, member: Node, source: bytes) -> PropertyInfo:
        name_node = member.child_by_field_name("name")
        key_node = member.child_by_field_name("index_type")
        if name_node is not None and key_node is not None:
            label = f"[{self.get_node_text(name_node, source)}: {self.get_node_text(key_node, source)}]"
        else:
            mapped = self.find_child(member, "mapped_type_clause")
            label = f"[{self.get_node_text(mapped, source)}]" if mapped is not None else "[index]"

        type_text = annotation_text(member.child_by_field_name("type"), source) or "any"
        return PropertyInfo(
            name=label,
            type=simplify_type(type_text),
            optional=False,
            readonly=self.has_token(member, "readonly"),
            docs=self._docs(member, source),
            is_index_signature=True,
        )

    # -------------------------------------------------------------------------
    # Per-kind extraction
    # -------------------------------------------------------------------------

    def _extract_interface(self, target: _ExportTarget, ctx: _FileContext) -> Optional[InterfaceDecl]:
        node, source = target.node, ctx.source
        name = self._name(node, source)
        if name is None:
            return None

        extends = []
        for clause in node.children:
            if clause.type in ("extends_type_clause", "extends_clause"):
                extends.extend(
                    simplify_type(self.get_node_text(t, source)) for t in clause.named_children
                )

        properties: list[PropertyInfo] = []
        methods: list[PropertyInfo] = []
        body = node.child_by_field_name("body")
        if body is not None:
            for member in body.named_children:
                if member.type == "property_signature":
                    prop = self._property_signature(member, source)
                    if prop is not None:
                        properties.append(prop)
                elif member.type == "method_signature":
                    member_name = self._name(member, source)
                    if member_name is not None:
                        methods.append(self._method_info(member, source, member_name))
                elif member.type == "call_signature":
                    methods.append(self._method_info(member, source, "(call)", is_call_signature=True))
                elif member.type == "index_signature":
                    methods.append(self._index_signature_info(member, source))

        type_params = self._extract_type_parameters(node, source)
        signature = f"interface {name}{self._type_params_suffix(type_params)}"
        if extends:
            signature += f" extends {', '.join(extends)}"

        return InterfaceDecl(
            name=name,
            file=ctx.file,
            module=ctx.module,
            signature=signature,
            docs=self._docs(target.anchor, source),
            line_number=self.line_number(target.anchor),
            properties=properties,
            methods=methods,
            type_parameters=type_params,
            extends=extends,
        )

    def _property_signature(self, member: Node, source: bytes) -> Optional[PropertyInfo]:
        """Extract a field from a property_signature node."""
        name = self._name(member, source)
        if name is None:
            return None
        type_text = annotation_text(member.child_by_field_name("type"), source) or "any"
        return PropertyInfo(
            name=name,
            type=simplify_type(type_text),
            optional=self.has_token(member, "?"),
            readonly=self.has_token(member, "readonly"),
            docs=self._docs(member, source),
        )

    def _extract_type_alias(self, target: _ExportTarget, ctx: _FileContext) -> Optional[TypeAliasDecl]:
        node, source = target.node, ctx.source
        name = self._name(node, source)
        if name is None:
            return None

        value = node.child_by_field_name("value")
        raw = self.get_node_text(value, source) if value is not None else "any"
        type_params = self._extract_type_parameters(node, source)
        head = f"type {name}{self._type_params_suffix(type_params)}"

        return TypeAliasDecl(
            name=name,
            file=ctx.file,
            module=ctx.module,
            signature=f"{head} = {simplify_type(raw)}",
            docs=self._docs(target.anchor, source),
            line_number=self.line_number(target.anchor),
            full_signature=f"{head} = {raw}",
            type_parameters=type_params,
        )

    def _extract_enum(self, target: _ExportTarget, ctx: _FileContext) -> Optional[EnumDecl]:
        node, source = target.node, ctx.source
        name = self._name(node, source)
        if name is None:
            return None

        members = []
        body = node.child_by_field_name("body")
        if body is not None:
            for member in body.named_children:
                if member.type == "enum_assignment":
                    member_name = self._name(member, source)
                    if member_name is not None:
                        value = self._enum_value(member.child_by_field_name("value"), source)
                        members.append(f"{member_name} = {value}")
                elif member.type in ("property_identifier", "string", "number", "computed_property_name"):
                    members.append(f"{self.get_node_text(member, source)} = auto")

        preview = ", ".join(members[:ENUM_PREVIEW_MEMBERS])
        hidden = len(members) - ENUM_PREVIEW_MEMBERS
        if hidden > 0:
            preview += f", ... (+{hidden} more)"
        signature = f"enum {name} {{ {preview} }}" if preview else f"enum {name} {{ }}"

        return EnumDecl(
            name=name,
            file=ctx.file,
            module=ctx.module,
            signature=signature,
            docs=self._docs(target.anchor, source),
            line_number=self.line_number(target.anchor),
            members=members,
        )

    def _enum_value(self, node: Optional[Node], source: bytes) -> str:
        """Literal value if any, else raw initializer text, else `auto`."""
        if node is None:
            return "auto"
        if node.type == "string":
            return f'"{string_content(node, source)}"'
        if node.type == "number":
            return format_number(self.get_node_text(node, source))
        return self.get_node_text(node, source)

    def _extract_function(self, target: _ExportTarget, ctx: _FileContext) -> Optional[FunctionDecl]:
        node, source = target.node, ctx.source
        name = self._name(node, source) or "anonymous"

        if node.type == "function_signature":
            if name in ctx.implemented_functions or name in ctx.emitted_signatures:
                return None
            ctx.emitted_signatures.add(name)

        params_node = node.child_by_field_name("parameters")
        params = extract_parameters(params_node, source) if params_node is not None else []
        return_type = simplify_type(infer_return_type(node, source))
        type_params = self._extract_type_parameters(node, source)

        rendered = ", ".join(p.render(mark_optional=True) for p in params)
        signature = f"function {name}{self._type_params_suffix(type_params)}({rendered}): {return_type}"

        return FunctionDecl(
            name=name,
            file=ctx.file,
            module=ctx.module,
            signature=signature,
            docs=self._docs(target.anchor, source),
            line_number=self.line_number(target.anchor),
            type_parameters=type_params,
        )

    def _extract_class(self, target: _ExportTarget, ctx: _FileContext) -> ClassDecl:
        node, source = target.node, ctx.source
        name = self._name(node, source) or "AnonymousClass"

        extends: Optional[list[str]] = None
        implements: Optional[list[str]] = None
        heritage = self.find_child(node, "class_heritage")
        if heritage is not None:
            extends_clause = self.find_child(heritage, "extends_clause")
            if extends_clause is not None:
                text = self.get_node_text(extends_clause, source)
                extends = [simplify_type(text[len("extends"):])]
            implements_clause = self.find_child(heritage, "implements_clause")
            if implements_clause is not None:
                implemented = [
                    simplify_type(self.get_node_text(t, source))
                    for t in implements_clause.named_children
                    if t.type != "comment"
                ]
                implements = implemented or None

        properties, methods = self._extract_class_members(node, source)

        type_params = self._extract_type_parameters(node, source)
        signature = f"class {name}{self._type_params_suffix(type_params)}"
        if extends:
            signature += f" extends {extends[0]}"
        if implements:
            signature += f" implements {', '.join(implements)}"

        return ClassDecl(
            name=name,
            file=ctx.file,
            module=ctx.module,
            signature=signature,
            docs=self._docs(target.anchor, source),
            line_number=self.line_number(target.anchor),
            properties=properties,
            methods=methods,
            type_parameters=type_params,
            extends=extends,
            implements=implements,
        )

    def _is_public(self, member: Node, source: bytes) -> bool:
        """Public or unspecified visibility, and not a `#private` name."""
        modifier = self.find_child(member, "accessibility_modifier")
        if modifier is not None and self.get_node_text(modifier, source) in NON_PUBLIC_SCOPES:
            return False
        name_node = member.child_by_field_name("name")
        return name_node is None or name_node.type != "private_property_identifier"

    def _extract_class_members(
        self, node: Node, source: bytes
    ) -> tuple[list[PropertyInfo], list[PropertyInfo]]:
        properties: list[PropertyInfo] = []
        methods: list[PropertyInfo] = []

        body = node.child_by_field_name("body")
        if body is None:
            return properties, methods

        implemented = set()
        for member in body.named_children:
            if member.type == "method_definition":
                member_name = self._name(member, source)
                if member_name is not None:
                    implemented.add(member_name)

        seen_signatures = set()
        for member in body.named_children:
            if member.type in ("method_definition", "method_signature", "abstract_method_signature"):
                if not self._is_public(member, source):
                    continue
                member_name = self._name(member, source)
                if member_name is None or member_name == "constructor":
                    continue
                if self.has_token(member, "get") or self.has_token(member, "set"):
                    continue
                if member.type != "method_definition":
                    # Overload signature; the implementation stands for it
                    if member_name in implemented or member_name in seen_signatures:
                        continue
                    seen_signatures.add(member_name)
                methods.append(self._method_info(member, source, member_name))

            elif member.type == "public_field_definition":
                if not self._is_public(member, source):
                    continue
                member_name = self._name(member, source)
                if member_name is None:
                    continue
                readonly = self.has_token(member, "readonly")
                type_text = annotation_text(member.child_by_field_name("type"), source)
                if type_text is None:
                    type_text = infer_type(member.child_by_field_name("value"), source, literal=readonly)
                properties.append(PropertyInfo(
                    name=member_name,
                    type=simplify_type(type_text),
                    optional=self.has_token(member, "?"),
                    readonly=readonly,
                    docs=self._docs(member, source),
                ))

        return properties, methods

    def _extract_variables(self, target: _ExportTarget, ctx: _FileContext) -> list[VariableDecl]:
        node, source = target.node, ctx.source

        if node.type == "variable_declaration":
            declaration_kind = "var"
        else:
            kind_node = node.child_by_field_name("kind")
            kind_text = self.get_node_text(kind_node, source) if kind_node is not None else ""
            declaration_kind = kind_text if kind_text in ("const", "let") else "const"

        docs = self._docs(target.anchor, source)
        records = []
        for declarator in node.named_children:
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field_name("name")
            if name_node is None:
                continue
            name = self.get_node_text(name_node, source)
            if target.names is not None and name not in target.names:
                continue

            value_node = declarator.child_by_field_name("value")
            type_text = annotation_text(declarator.child_by_field_name("type"), source)
            if type_text is None:
                type_text = infer_type(value_node, source, literal=declaration_kind == "const")

            value = None
            if value_node is not None:
                value = truncate_value(self.get_node_text(value_node, source))

            records.append(VariableDecl(
                name=name,
                file=ctx.file,
                module=ctx.module,
                signature=f"{declaration_kind} {name}: {simplify_type(type_text)}",
                docs=docs,
                line_number=self.line_number(declarator),
                value=value,
                declaration_kind=declaration_kind,
            ))
        return records

    def _extract_namespace(self, target: _ExportTarget, ctx: _FileContext) -> Optional[NamespaceDecl]:
        node, source = target.node, ctx.source
        name = self._name(node, source)
        if name is None:
            return None

        groups: dict[str, list[str]] = {label: [] for label in NAMESPACE_MEMBER_ORDER}
        body = node.child_by_field_name("body")
        if body is not None:
            for stmt in body.named_children:
                inner = None
                if stmt.type == "export_statement":
                    decl = stmt.child_by_field_name("declaration")
                    inner = self._unwrap(decl) if decl is not None else None
                elif target.ambient:
                    # Everything inside `declare namespace` is exported
                    inner = self._unwrap(stmt)
                if inner is None:
                    continue

                label = NAMESPACE_MEMBER_LABELS.get(inner.type)
                member_name = self._name(inner, source)
                if label is None or member_name is None:
                    continue
                line = f"{label} {member_name}"
                if line not in groups[label]:
                    groups[label].append(line)

        members = [line for label in NAMESPACE_MEMBER_ORDER for line in groups[label]]

        return NamespaceDecl(
            name=name,
            file=ctx.file,
            module=ctx.module,
            signature=f"namespace {name} {{ /* {len(members)} members */ }}",
            docs=self._docs(target.anchor, source),
            line_number=self.line_number(target.anchor),
            members=members,
        )

    def _extract_re_export(self, target: _ExportTarget, ctx: _FileContext) -> Optional[ReExportDecl]:
        stmt, source = target.node, ctx.source
        source_node = stmt.child_by_field_name("source")
        specifier = string_content(source_node, source) if source_node is not None else ""
        if not specifier:
            return None

        members: list[str] = []
        namespace_export = self.find_child(stmt, "namespace_export")
        if self.has_token(stmt, "*"):
            label = f'* from "{specifier}"'
        elif namespace_export is not None:
            alias = " ".join(self.get_node_text(namespace_export, source).split())
            label = f'{alias} from "{specifier}"'
        else:
            clause = self.find_child(stmt, "export_clause")
            if clause is None:
                return None
            for spec in clause.named_children:
                if spec.type != "export_specifier":
                    continue
                name = self._name(spec, source)
                if name is None:
                    continue
                alias_node = spec.child_by_field_name("alias")
                if alias_node is not None:
                    members.append(f"{name} as {self.get_node_text(alias_node, source)}")
                else:
                    members.append(name)
            if not members:
                return None
            label = f'{{ {", ".join(members)} }} from "{specifier}"'

        return ReExportDecl(
            name=label,
            file=ctx.file,
            module=ctx.module,
            signature=f"export {label}",
            line_number=self.line_number(stmt),
            members=members,
            re_export_source=specifier,
        )


# Register the extractor
register_extractor(TypeScriptExtractor())
