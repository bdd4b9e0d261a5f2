"""
Type Text Helpers

Simplification of rendered type strings, initializer previews, and a light
syntactic type inference for declarations that carry no annotation.

tree-sitter gives us source text, not checker-resolved types, so inference is
limited to what the syntax alone determines. Anything else renders as `any`.
"""

import re
from typing import Optional

from tree_sitter import Node

from tsindex.ast.models import ParameterInfo
from tsindex.configs.constants import VALUE_PREVIEW_LIMIT

_IMPORT_PREFIX = re.compile(r"import\([^)]+\)\.")
_TYPEOF_IMPORT_PREFIX = re.compile(r"typeof import\([^)]+\)\.")
# A drive letter must not follow a word character or slash, so "https://" never matches
_DRIVE_PATH = re.compile(r"(?<![\w/])[A-Za-z]:/[^\"]+/")
_WHITESPACE = re.compile(r"\s+")

# Widened type of each literal node type
_LITERAL_TYPES = {
    "string": "string",
    "template_string": "string",
    "number": "number",
    "true": "boolean",
    "false": "boolean",
    "regex": "RegExp",
}

FUNCTION_NODE_TYPES = {"arrow_function", "function_expression", "function", "generator_function"}


def simplify_type(type_text: str) -> str:
    """
    Make a type string readable without losing its semantic name.

    Strips `import("...").` qualifiers (so `typeof import("x").Foo` keeps its
    `typeof`), drive-letter absolute path fragments, and collapses whitespace.
    """
    text = _IMPORT_PREFIX.sub("", type_text)
    text = _TYPEOF_IMPORT_PREFIX.sub("", text)
    text = _DRIVE_PATH.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def truncate_value(text: str, limit: int = VALUE_PREVIEW_LIMIT) -> str:
    """Cut an initializer preview to `limit` characters, marking the cut with '...'."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def format_number(text: str) -> str:
    """Render a numeric literal the way JavaScript prints its value (0x10 -> 16)."""
    cleaned = text.replace("_", "")
    try:
        return str(int(cleaned, 0))
    except ValueError:
        pass
    try:
        value = float(cleaned)
    except ValueError:
        return text
    if value.is_integer():
        return str(int(value))
    return repr(value)


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def annotation_text(node: Optional[Node], source: bytes) -> Optional[str]:
    """Type text of a type_annotation-like node, without its leading `:` marker."""
    if node is None:
        return None
    text = node_text(node, source).strip()
    # Handles ":", "?:", "-?:" and "+?:" forms
    text = re.sub(r"^[-+]?\??:", "", text)
    return text.strip() or None


def string_content(node: Node, source: bytes) -> str:
    """Text of a string literal without its quotes."""
    text = node_text(node, source)
    if len(text) >= 2 and text[0] in "\"'`" and text[-1] == text[0]:
        return text[1:-1]
    return text


def infer_type(node: Optional[Node], source: bytes, literal: bool = False) -> str:
    """
    Infer the type of an initializer expression from its syntax.

    Args:
        node: Expression node (None means no initializer)
        source: File contents
        literal: Keep literal types (`const x = "a"` is `"a"`, not `string`)

    Returns:
        Type text, `any` when the syntax does not determine it
    """
    if node is None:
        return "any"

    node_type = node.type

    if node_type == "parenthesized_expression" and node.named_children:
        return infer_type(node.named_children[0], source, literal)

    if node_type in _LITERAL_TYPES:
        if literal and node_type == "string":
            return f'"{string_content(node, source)}"'
        if literal and node_type == "number":
            return format_number(node_text(node, source))
        if literal and node_type in ("true", "false"):
            return node_type
        return _LITERAL_TYPES[node_type]

    if node_type in ("null", "undefined"):
        return node_type

    if node_type == "unary_expression":
        operand = node.child_by_field_name("argument")
        operator = node.child_by_field_name("operator")
        op = node_text(operator, source) if operator is not None else ""
        if op == "!":
            return "boolean"
        if op == "typeof":
            return "string"
        if op in ("-", "+") and operand is not None and operand.type == "number":
            if literal and op == "-":
                return f"-{format_number(node_text(operand, source))}"
            return "number"
        return "any"

    if node_type == "as_expression":
        named = node.named_children
        if any(child.type == "const" for child in node.children):
            return infer_type(named[0] if named else None, source, literal=True)
        if len(named) > 1:
            return node_text(named[-1], source)
        return "any"

    if node_type == "satisfies_expression" and node.named_children:
        return infer_type(node.named_children[0], source, literal)

    if node_type == "new_expression":
        constructor = node.child_by_field_name("constructor")
        if constructor is None:
            return "any"
        type_args = node.child_by_field_name("type_arguments")
        text = node_text(constructor, source)
        if type_args is not None:
            text += node_text(type_args, source)
        return text

    if node_type == "array":
        element_types = []
        for element in node.named_children:
            if element.type == "comment":
                continue
            element_types.append(infer_type(element, source))
        unique = list(dict.fromkeys(element_types))
        if len(unique) == 1 and unique[0] != "any":
            return f"{unique[0]}[]"
        if len(unique) > 1 and "any" not in unique:
            return f"({' | '.join(unique)})[]"
        return "any[]"

    if node_type == "object":
        return _infer_object_type(node, source)

    if node_type in FUNCTION_NODE_TYPES:
        return infer_function_type(node, source)

    if node_type == "binary_expression":
        operator = node.child_by_field_name("operator")
        op = node_text(operator, source) if operator is not None else ""
        if op in ("===", "!==", "==", "!=", "<", ">", "<=", ">=", "instanceof", "in"):
            return "boolean"
        if op in ("-", "*", "/", "%", "**", "|", "&", "^", "<<", ">>", ">>>"):
            return "number"
        return "any"

    return "any"


def _infer_object_type(node: Node, source: bytes) -> str:
    members = []
    for child in node.named_children:
        if child.type == "pair":
            key = child.child_by_field_name("key")
            value = child.child_by_field_name("value")
            if key is None:
                continue
            members.append(f"{node_text(key, source)}: {infer_type(value, source)};")
        elif child.type == "shorthand_property_identifier":
            members.append(f"{node_text(child, source)}: any;")
        elif child.type == "method_definition":
            name = child.child_by_field_name("name")
            if name is not None:
                members.append(f"{node_text(name, source)}: {infer_function_type(child, source)};")
    if not members:
        return "{}"
    return "{ " + " ".join(members) + " }"


def infer_return_type(node: Node, source: bytes) -> str:
    """
    Return type of a function-like node.

    Uses the annotation when present. Otherwise `void` when the body never
    returns a value, `any` when it does; async functions wrap it in Promise.
    """
    annotation = annotation_text(node.child_by_field_name("return_type"), source)
    if annotation:
        return annotation

    is_async = any(child.type == "async" for child in node.children)
    body = node.child_by_field_name("body")

    if body is None:
        inner = "any"
    elif body.type != "statement_block":
        # Expression-bodied arrow function
        inner = infer_type(body, source)
    else:
        inner = "any" if _returns_value(body) else "void"

    return f"Promise<{inner}>" if is_async else inner


def _returns_value(node: Node) -> bool:
    for child in node.named_children:
        if child.type in FUNCTION_NODE_TYPES or child.type in (
            "function_declaration",
            "generator_function_declaration",
            "class_declaration",
            "class",
            "method_definition",
        ):
            continue
        if child.type == "return_statement" and child.named_children:
            return True
        if _returns_value(child):
            return True
    return False


def extract_parameters(node: Node, source: bytes) -> list[ParameterInfo]:
    """Extract parameters from a formal_parameters node."""
    params = []

    for child in node.named_children:
        if child.type not in ("required_parameter", "optional_parameter"):
            continue

        pattern = child.child_by_field_name("pattern")
        if pattern is None:
            continue
        if pattern.type == "rest_pattern" and pattern.named_children:
            name = node_text(pattern.named_children[0], source)
        else:
            name = node_text(pattern, source)

        type_text = annotation_text(child.child_by_field_name("type"), source)
        if type_text is None:
            type_text = infer_type(child.child_by_field_name("value"), source)

        params.append(ParameterInfo(
            name=_WHITESPACE.sub(" ", name).strip(),
            type_annotation=simplify_type(type_text),
            is_optional=child.type == "optional_parameter",
        ))

    return params


def infer_function_type(node: Node, source: bytes) -> str:
    """Function type text of an arrow function or function expression."""
    type_params = node.child_by_field_name("type_parameters")
    prefix = node_text(type_params, source) if type_params is not None else ""

    params_node = node.child_by_field_name("parameters")
    if params_node is not None:
        params = [p.render(mark_optional=True) for p in extract_parameters(params_node, source)]
    else:
        single = node.child_by_field_name("parameter")
        params = [f"{node_text(single, source)}: any"] if single is not None else []

    return simplify_type(f"{prefix}({', '.join(params)}) => {infer_return_type(node, source)}")
