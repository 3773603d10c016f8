"""
区块状态提取器 (Chunk Status Extractor)
=====================================

按注册表原生顺序输出区块生成阶段名称（仅 path 部分，丢弃命名空间）。
"""
from typing import List

from extractor.extractors.base import BaseExtractor
from extractor.host import RegistryKeys, ServerHandle


class ChunkStatusExtractor(BaseExtractor):
    """chunk_status.json: flat array of stage names, in registry order (never sorted)."""

    def file_name(self) -> str:
        return "chunk_status.json"

    def extract(self, server: ServerHandle) -> List[str]:
        registry = server.registry(RegistryKeys.CHUNK_STATUS)
        return [self._entry_path(entry) for entry in registry]
