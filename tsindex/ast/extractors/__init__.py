"""
Declaration Extractors

Each extractor implements the LanguageExtractor interface for a family of
parser dialects.
"""

from tsindex.ast.extractors.base import LanguageExtractor, get_extractor, register_extractor

# Import extractors to trigger registration
from tsindex.ast.extractors.typescript import TypeScriptExtractor

__all__ = [
    "LanguageExtractor",
    "get_extractor",
    "register_extractor",
    "TypeScriptExtractor",
]
