"""
Fuzzy Search

Token-weighted relevance ranking of declarations against a free-text query.

Scoring (all comparisons lowercased):
- whole query: +100 exact name, else +50 name prefix, else +25 name substring
- each whitespace token: +10 if in the name, +5 if in the docs

The whole-query and per-token bonuses add up independently.
"""

from typing import Iterable

from tsindex.ast.models import ExtractedDeclaration
from tsindex.configs.constants import DEFAULT_FUZZY_LIMIT

EXACT_MATCH_SCORE = 100
PREFIX_MATCH_SCORE = 50
SUBSTRING_MATCH_SCORE = 25
TOKEN_IN_NAME_SCORE = 10
TOKEN_IN_DOCS_SCORE = 5


def score_declaration(decl: ExtractedDeclaration, query: str, tokens: list[str]) -> int:
    """
    Relevance score of one declaration.

    Args:
        decl: Candidate declaration
        query: Lowercased, trimmed query
        tokens: Lowercased whitespace tokens of the query

    Returns:
        Score (0 means no match)
    """
    name = decl.name.lower()
    docs = (decl.docs or "").lower()

    score = 0
    if name == query:
        score += EXACT_MATCH_SCORE
    elif name.startswith(query):
        score += PREFIX_MATCH_SCORE
    elif query in name:
        score += SUBSTRING_MATCH_SCORE

    for token in tokens:
        if token in name:
            score += TOKEN_IN_NAME_SCORE
        if token in docs:
            score += TOKEN_IN_DOCS_SCORE

    return score


def fuzzy_search(
    declarations: Iterable[ExtractedDeclaration],
    query: str,
    limit: int = DEFAULT_FUZZY_LIMIT,
) -> list[ExtractedDeclaration]:
    """
    Rank declarations by relevance to a query.

    Args:
        declarations: Declarations in index order
        query: Free-text query
        limit: Maximum results to return

    Returns:
        Matching declarations, best first. Ties keep index order.
    """
    query = query.strip().lower()
    if not query or limit <= 0:
        return []

    tokens = query.split()
    scored = []
    for decl in declarations:
        score = score_declaration(decl, query, tokens)
        if score > 0:
            scored.append((score, decl))

    # sort() is stable, so equal scores stay in index order
    scored.sort(key=lambda item: item[0], reverse=True)
    return [decl for _, decl in scored[:limit]]
