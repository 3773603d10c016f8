"""
宿主注册表模块 (Host Registry Module)
====================================

以显式传入的 ServerHandle 暴露宿主的注册表，替代全局静态查找，
便于用内存中构造的注册表测试提取器。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from extractor.errors import RegistryNotFoundError
from extractor.ir import Identifier

T = TypeVar("T")


class RegistryKeys:
    """注册表名称常量（与宿主注册表键的 path 部分一致）。"""
    CHUNK_STATUS = "chunk_status"
    NOISE_PARAMETERS = "worldgen/noise"
    MULTI_NOISE_PARAMETER_LIST = "worldgen/multi_noise_biome_source_parameter_list"


@dataclass(frozen=True)
class RegistryEntry(Generic[T]):
    """
    注册表条目。

    属性:
        key: 条目标识符；为 None 表示宿主无法解析该条目的标识符
        value: 条目值
    """
    key: Optional[Identifier]
    value: T


class Registry(Generic[T]):
    """
    有序、只读的注册表，按宿主原生顺序迭代条目。
    """

    def __init__(self, key: str, entries: Iterable[RegistryEntry[T]] = ()):
        self.key = key
        self._entries: List[RegistryEntry[T]] = list(entries)

    @classmethod
    def of(cls, key: str, items: Iterable[tuple]) -> "Registry[T]":
        """从 (标识符字符串或 Identifier, 值) 对构造注册表。"""
        entries = []
        for raw_key, value in items:
            ident = Identifier.parse(raw_key) if isinstance(raw_key, str) else raw_key
            entries.append(RegistryEntry(key=ident, value=value))
        return cls(key, entries)

    def __iter__(self) -> Iterator[RegistryEntry[T]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> List[Optional[Identifier]]:
        return [entry.key for entry in self._entries]

    def __repr__(self) -> str:
        return f"Registry({self.key!r}, {len(self._entries)} entries)"


class ServerHandle:
    """
    服务器句柄：提取时传入每个提取器的显式上下文对象。

    假定在提取开始前已完成初始化，提取期间注册表内容不再变化。
    """

    def __init__(self, registries: Optional[Dict[str, Registry[Any]]] = None):
        self._registries: Dict[str, Registry[Any]] = dict(registries or {})

    def registry(self, key: str) -> Registry[Any]:
        """获取注册表；不存在时抛出 RegistryNotFoundError（不做本地恢复）。"""
        try:
            return self._registries[key]
        except KeyError:
            raise RegistryNotFoundError(key) from None

    def has_registry(self, key: str) -> bool:
        return key in self._registries

    def registry_keys(self) -> List[str]:
        return list(self._registries)
