"""
错误类型模块 (Error Types Module)
================================

提取流程中的致命错误。提取器只负责抛出，由调用方（CLI）决定终止整个运行。
"""


class ExtractionError(Exception):
    """所有提取错误的基类。"""


class RegistryNotFoundError(ExtractionError, LookupError):
    """服务器句柄中不存在所请求的注册表。"""

    def __init__(self, registry_key: str):
        super().__init__(f"Registry not found: {registry_key}")
        self.registry_key = registry_key


class MalformedIdentifierError(ExtractionError, ValueError):
    """条目标识符无法解析出 path 部分。"""


class FixedPointDecodeError(ExtractionError, ValueError):
    """定点数输入超出宿主的编码范围。"""


class DuplicateKeyError(ExtractionError, ValueError):
    """严格模式下，两个条目映射到同一个输出键。"""

    def __init__(self, key: str, scope: str):
        super().__init__(f"Duplicate key {key!r} in {scope}")
        self.key = key
        self.scope = scope


class SnapshotFormatError(ExtractionError, ValueError):
    """注册表快照文件结构不合法。"""
