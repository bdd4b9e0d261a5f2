"""
JSDoc Extraction

Default documentation extractor: reads the `/** ... */` blocks attached to a
declaration and returns their description text, tags stripped.

Any callable matching DocExtractor can replace it in TypeScriptExtractor.
"""

from typing import Callable, Optional

from tree_sitter import Node

# (node, source) -> description text, or None when there is none
DocExtractor = Callable[[Node, bytes], Optional[str]]

# Siblings that may sit between a JSDoc block and the node it documents
_SKIPPABLE = {"comment", "decorator"}


def parse_jsdoc_description(comment: str) -> str:
    """
    Description part of one JSDoc comment.

    Strips the comment delimiters and leading `*` gutters, then keeps every
    line before the first block tag (`@param`, `@returns`, ...).

    Args:
        comment: Raw comment text including `/**` and `*/`

    Returns:
        Description text (may be empty)
    """
    body = comment[3:]
    if body.endswith("*/"):
        body = body[:-2]

    description = []
    for line in body.splitlines():
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        if line.lstrip().startswith("@"):
            break
        description.append(line.rstrip())

    return "\n".join(description).strip()


def _is_jsdoc(text: str) -> bool:
    return text.startswith("/**") and not text.startswith("/**/")


def extract_jsdoc(node: Node, source: bytes) -> Optional[str]:
    """
    Documentation attached to a node.

    Collects the JSDoc blocks directly preceding the node (line comments and
    decorators in between are skipped), in source order.

    Returns:
        Descriptions joined with newlines, or None when there are none
    """
    blocks = []
    sibling = node.prev_sibling
    while sibling is not None and sibling.type in _SKIPPABLE:
        if sibling.type == "comment":
            text = source[sibling.start_byte:sibling.end_byte].decode("utf-8", errors="replace")
            if _is_jsdoc(text):
                blocks.append(text)
        sibling = sibling.prev_sibling

    descriptions = [parse_jsdoc_description(text) for text in reversed(blocks)]
    docs = "\n".join(d for d in descriptions if d).strip()
    return docs or None
