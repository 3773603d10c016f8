"""
Extract layer: fixed, file-name keyed extractor registry.
"""

from extractor.extract.registry import ExtractorRegistry

__all__ = [
    "ExtractorRegistry",
]
