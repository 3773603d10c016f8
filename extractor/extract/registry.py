"""
提取器注册表模块 (Extractor Registry Module)
==========================================

以输出文件名为键登记提取器实例。集合固定、顺序确定，不做动态插件发现。
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from extractor.extractors import (
    BaseExtractor,
    ChunkStatusExtractor,
    MultiNoiseExtractor,
    NoiseParametersExtractor,
)
from extractor.logger import get_logger

logger = get_logger(__name__)


class ExtractorRegistry:
    """
    提取器注册表：将输出文件名映射到提取器实例。

    构造时注册内置提取器；调用方可通过 register 覆盖或扩展。
    """

    def __init__(self, strict_keys: bool = False, register_defaults: bool = True):
        self._strict_keys = strict_keys
        self._extractors: Dict[str, BaseExtractor] = {}
        if register_defaults:
            self._register_defaults()

    # -- public API ----------------------------------------------------------

    def register(self, extractor: BaseExtractor) -> None:
        """注册或覆盖同名输出文件的提取器。"""
        name = extractor.file_name()
        if not name:
            raise ValueError(f"{type(extractor).__name__} returned an empty file name")
        if name in self._extractors:
            logger.debug("Overriding extractor for %s", name)
        self._extractors[name] = extractor

    def get(self, file_name: str) -> BaseExtractor:
        try:
            return self._extractors[file_name]
        except KeyError:
            raise KeyError(f"Unknown extractor: {file_name!r} (known: {self.names()})") from None

    def names(self) -> List[str]:
        return list(self._extractors)

    def select(self, file_names: Optional[Iterable[str]] = None) -> List[BaseExtractor]:
        """按名称选择提取器；为 None 时返回全部（注册顺序）。未知名称抛出 KeyError。"""
        if file_names is None:
            return list(self._extractors.values())
        return [self.get(name) for name in file_names]

    def __iter__(self) -> Iterator[BaseExtractor]:
        return iter(list(self._extractors.values()))

    def __len__(self) -> int:
        return len(self._extractors)

    # -- built-in extractors -------------------------------------------------

    def _register_defaults(self) -> None:
        self.register(ChunkStatusExtractor(strict_keys=self._strict_keys))
        self.register(NoiseParametersExtractor(strict_keys=self._strict_keys))
        self.register(MultiNoiseExtractor(strict_keys=self._strict_keys))
