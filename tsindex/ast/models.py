"""
Data Models for Declaration Extraction

Structured representations of the exported declarations of a TypeScript
source tree. ExtractedDeclaration is a tagged union: one subclass per kind,
each carrying only the fields that are legal for that kind.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Literal, Optional

DeclarationKind = Literal[
    "interface",
    "type",
    "enum",
    "function",
    "class",
    "variable",
    "namespace",
    "re-export",
]

# Order matters: files emit their records grouped in this order
DECLARATION_KINDS: tuple[str, ...] = (
    "interface",
    "type",
    "enum",
    "function",
    "class",
    "variable",
    "namespace",
    "re-export",
)

# Python attribute -> wire key, where they differ
_WIRE_KEYS = {
    "full_signature": "fullSignature",
    "type_parameters": "typeParameters",
    "re_export_source": "reExportSource",
    "line_number": "lineNumber",
    "declaration_kind": "declarationKind",
    "is_method": "isMethod",
    "is_call_signature": "isCallSignature",
    "is_index_signature": "isIndexSignature",
    "return_type": "returnType",
}


def _to_wire(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_to_wire(v) for v in value]
    return value


def _dataclass_to_dict(obj: Any, leading: Optional[dict] = None) -> dict:
    """Serialize a dataclass with camelCase keys, omitting None values."""
    result = dict(leading or {})
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        result[_WIRE_KEYS.get(f.name, f.name)] = _to_wire(value)
    return result


@dataclass
class ParameterInfo:
    """Represents a function or method parameter."""

    name: str
    type_annotation: str = "any"
    is_optional: bool = False

    def render(self, mark_optional: bool = False) -> str:
        """Render as `name: type`, with `?` after the name when asked and optional."""
        optional = "?" if mark_optional and self.is_optional else ""
        return f"{self.name}{optional}: {self.type_annotation}"


@dataclass
class TypeParameter:
    """A generic type parameter: `<T extends Base = Default>`."""

    name: str
    constraint: Optional[str] = None
    default: Optional[str] = None

    def to_dict(self) -> dict:
        return _dataclass_to_dict(self)


@dataclass
class PropertyInfo:
    """A member of an interface or class.

    is_method, is_call_signature and is_index_signature are mutually
    exclusive; all False means an ordinary field.
    """

    name: str
    type: str
    optional: bool = False
    readonly: bool = False
    docs: Optional[str] = None
    is_method: bool = False
    is_call_signature: bool = False
    is_index_signature: bool = False
    parameters: Optional[list[str]] = None
    return_type: Optional[str] = None

    def to_dict(self) -> dict:
        return _dataclass_to_dict(self)


@dataclass
class ExtractedDeclaration:
    """Common shape of every exported declaration record."""

    kind: ClassVar[str] = ""

    name: str
    file: str  # Relative to the source root, forward slashes
    module: str  # First path segment of file, or "root"
    signature: str
    docs: Optional[str] = None
    line_number: Optional[int] = None

    def to_dict(self) -> dict:
        """Wire representation (camelCase keys, absent fields omitted)."""
        return _dataclass_to_dict(self, {"kind": self.kind})


@dataclass
class InterfaceDecl(ExtractedDeclaration):
    kind: ClassVar[str] = "interface"

    properties: list[PropertyInfo] = field(default_factory=list)
    methods: list[PropertyInfo] = field(default_factory=list)
    type_parameters: list[TypeParameter] = field(default_factory=list)
    extends: list[str] = field(default_factory=list)


@dataclass
class TypeAliasDecl(ExtractedDeclaration):
    kind: ClassVar[str] = "type"

    full_signature: str = ""
    type_parameters: list[TypeParameter] = field(default_factory=list)


@dataclass
class EnumDecl(ExtractedDeclaration):
    kind: ClassVar[str] = "enum"

    members: list[str] = field(default_factory=list)  # "NAME = value"


@dataclass
class FunctionDecl(ExtractedDeclaration):
    kind: ClassVar[str] = "function"

    type_parameters: list[TypeParameter] = field(default_factory=list)


@dataclass
class ClassDecl(ExtractedDeclaration):
    kind: ClassVar[str] = "class"

    properties: list[PropertyInfo] = field(default_factory=list)
    methods: list[PropertyInfo] = field(default_factory=list)
    type_parameters: list[TypeParameter] = field(default_factory=list)
    extends: Optional[list[str]] = None
    implements: Optional[list[str]] = None


@dataclass
class VariableDecl(ExtractedDeclaration):
    kind: ClassVar[str] = "variable"

    value: Optional[str] = None  # Initializer preview, at most 100 chars + "..."
    declaration_kind: str = "const"


@dataclass
class NamespaceDecl(ExtractedDeclaration):
    kind: ClassVar[str] = "namespace"

    members: list[str] = field(default_factory=list)  # "kind name"


@dataclass
class ReExportDecl(ExtractedDeclaration):
    kind: ClassVar[str] = "re-export"

    members: list[str] = field(default_factory=list)  # Empty for `export *`
    re_export_source: str = ""


DECLARATION_TYPES: dict[str, type[ExtractedDeclaration]] = {
    cls.kind: cls
    for cls in (
        InterfaceDecl,
        TypeAliasDecl,
        EnumDecl,
        FunctionDecl,
        ClassDecl,
        VariableDecl,
        NamespaceDecl,
        ReExportDecl,
    )
}


# =============================================================================
# Query Results
# =============================================================================


@dataclass
class TypeHierarchy:
    """Inheritance neighbourhood of one declaration."""

    declaration: ExtractedDeclaration
    parents: list[str] = field(default_factory=list)
    children: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.declaration.to_dict(),
            "parents": list(self.parents),
            "children": list(self.children),
        }


@dataclass
class ModuleStatistics:
    """Per-kind declaration counts for one module."""

    module: str
    interfaces: int = 0
    types: int = 0
    enums: int = 0
    functions: int = 0
    classes: int = 0
    variables: int = 0
    namespaces: int = 0
    re_exports: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        data = _dataclass_to_dict(self)
        data["reExports"] = data.pop("re_exports")
        return data


@dataclass
class LibraryStatistics:
    total_declarations: int
    by_kind: dict[str, int]
    by_module: list[ModuleStatistics] = field(default_factory=list)
    top_interfaces: list[str] = field(default_factory=list)
    top_types: list[str] = field(default_factory=list)
    top_functions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalDeclarations": self.total_declarations,
            "byKind": dict(self.by_kind),
            "byModule": [m.to_dict() for m in self.by_module],
            "topInterfaces": list(self.top_interfaces),
            "topTypes": list(self.top_types),
            "topFunctions": list(self.top_functions),
        }


@dataclass
class DependencyInfo:
    """Exports and re-export sources of one module."""

    module: str
    exports: list[str] = field(default_factory=list)
    re_exports_from: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "module": self.module,
            "exports": list(self.exports),
            "reExportsFrom": list(self.re_exports_from),
        }
