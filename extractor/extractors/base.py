"""
提取器基类模块 (Base Extractor Module)
=====================================

为所有注册表提取器提供统一接口：file_name() 与 extract(server)。
"""
import time
from abc import ABC, abstractmethod
from typing import Any, Dict

from extractor.errors import DuplicateKeyError, MalformedIdentifierError
from extractor.host import RegistryEntry, ServerHandle
from extractor.logger import get_logger

logger = get_logger(__name__)


class BaseExtractor(ABC):
    """
    所有注册表提取器的抽象基类。

    提供标准接口:
    - file_name(): 抽象方法，返回稳定的输出文件名（下游依赖此名称）
    - extract(): 抽象方法，只读地将一个注册表转换为 JSON 文档
    - run(): 包装方法，记录耗时后原样抛出异常，不吞掉任何错误

    提取器无状态，可重复调用。
    """

    def __init__(self, strict_keys: bool = False):
        """
        初始化提取器。

        参数:
            strict_keys: 为 True 时输出键冲突抛出 DuplicateKeyError；
                否则后写覆盖先写，并记录警告
        """
        self.strict_keys = strict_keys

    @abstractmethod
    def file_name(self) -> str:
        """返回输出文件名，如 "chunk_status.json"。"""
        pass

    @abstractmethod
    def extract(self, server: ServerHandle) -> Any:
        """
        从服务器句柄提取注册表并返回 JSON 文档（list 或 dict）。

        注册表为空时返回空文档，不返回 None。

        抛出:
            ExtractionError: 注册表缺失、标识符无法解析等致命错误
        """
        pass

    def run(self, server: ServerHandle) -> Any:
        """执行提取并记录日志；失败时记录后重新抛出，由调用方终止整个运行。"""
        name = self.file_name()
        started = time.perf_counter()
        try:
            document = self.extract(server)
        except Exception as e:
            logger.error("Extractor %s failed: %s", name, e)
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("Extracted %s: %d top-level items in %.1f ms", name, len(document), elapsed_ms)
        return document

    def _entry_path(self, entry: RegistryEntry) -> str:
        """返回条目标识符的 path 部分；无法解析时抛出 MalformedIdentifierError。"""
        if entry.key is None:
            raise MalformedIdentifierError(f"{self.file_name()}: registry entry has no resolvable identifier")
        return entry.key.path

    def _put(self, target: Dict[str, Any], key: str, value: Any, scope: str) -> None:
        """写入输出对象；键冲突按 strict_keys 策略处理。"""
        if key in target:
            if self.strict_keys:
                raise DuplicateKeyError(key, scope)
            logger.warning("Duplicate key %r in %s, keeping last value", key, scope)
        target[key] = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(file_name={self.file_name()!r})"
