"""
Pipeline: thin orchestrator that runs extractors against one server handle.

run_extract – ServerHandle → {file_name: JSON document}

Writing the documents to disk is left to the caller (app.backend.process).
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from extractor.extract.registry import ExtractorRegistry
from extractor.host import ServerHandle
from extractor.logger import get_logger

logger = get_logger(__name__)


def run_extract(
    server: ServerHandle,
    registry: Optional[ExtractorRegistry] = None,
    only: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """
    Run the selected extractors (all by default) in registration order.

    Returns an ordered mapping of output file name to JSON document.
    The first failing extractor aborts the run; no partial result is returned.
    """
    registry = registry if registry is not None else ExtractorRegistry()
    extractors = registry.select(only)
    logger.info("run_extract: %d extractors: %s", len(extractors), [e.file_name() for e in extractors])

    documents: Dict[str, Any] = {}
    for extractor in extractors:
        documents[extractor.file_name()] = extractor.run(server)
    return documents
