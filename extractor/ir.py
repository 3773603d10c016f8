"""
宿主数据模型模块 (Host Data Model Module)
========================================

定义提取器读取的宿主注册表条目：标识符、噪声参数、参数区间、多噪声超立方体与参数列表。
所有模型只在一次提取调用期间存在，提取器不会修改它们。
"""

import re
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, field_validator, model_validator

from extractor.errors import MalformedIdentifierError

DEFAULT_NAMESPACE = "minecraft"
NAMESPACE_SEPARATOR = ":"

_NAMESPACE_RE = re.compile(r"[a-z0-9._-]+")
_PATH_RE = re.compile(r"[a-z0-9/._-]+")


def _check_namespace(namespace: str) -> str:
    if not isinstance(namespace, str) or not _NAMESPACE_RE.fullmatch(namespace):
        raise MalformedIdentifierError(f"Invalid identifier namespace: {namespace!r}")
    return namespace


def _check_path(path: str) -> str:
    if not isinstance(path, str) or not _PATH_RE.fullmatch(path):
        raise MalformedIdentifierError(f"Invalid identifier path: {path!r}")
    return path


class Identifier(BaseModel):
    """
    层级标识符 namespace:path，用作注册表键。

    属性:
        namespace: 命名空间，如 "minecraft"
        path: 路径部分，如 "worldgen/noise" 或 "plains"
    """
    namespace: str
    path: str

    class Config:
        frozen = True

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        return _check_namespace(v)

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        return _check_path(v)

    @classmethod
    def parse(cls, raw: str) -> "Identifier":
        """
        解析 "namespace:path" 字符串；缺少命名空间时使用 DEFAULT_NAMESPACE。

        抛出:
            MalformedIdentifierError: 字符串为空、格式错误或含非法字符
        """
        if not isinstance(raw, str) or not raw:
            raise MalformedIdentifierError(f"Identifier must be a non-empty string, got {raw!r}")
        namespace, sep, path = raw.partition(NAMESPACE_SEPARATOR)
        if not sep:
            namespace, path = DEFAULT_NAMESPACE, raw
        return cls(namespace=_check_namespace(namespace), path=_check_path(path))

    def __str__(self) -> str:
        return f"{self.namespace}{NAMESPACE_SEPARATOR}{self.path}"


class NoiseParameters(BaseModel):
    """
    噪声参数记录。

    属性:
        first_octave: 起始倍频程
        amplitudes: 振幅系数，按相对 first_octave 的偏移排序，顺序不可改变
    """
    first_octave: int
    amplitudes: List[float]

    @field_validator("first_octave", mode="before")
    @classmethod
    def validate_first_octave(cls, v: Any) -> Any:
        # bool is an int subclass; no coercion from str either
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(f"first_octave must be an integer, got {v!r}")
        return v

    @field_validator("amplitudes", mode="before")
    @classmethod
    def validate_amplitudes(cls, v: Any) -> Any:
        if not isinstance(v, (list, tuple)):
            raise ValueError(f"amplitudes must be a list, got {type(v).__name__}")
        for a in v:
            if isinstance(a, bool) or not isinstance(a, (int, float)):
                raise ValueError(f"amplitude must be a number, got {a!r}")
        return v


class ParameterRange(BaseModel):
    """定点编码的闭区间 [min, max]。"""
    min: int
    max: int

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_order(self) -> "ParameterRange":
        if self.min > self.max:
            raise ValueError(f"min > max: {self.min} > {self.max}")
        return self

    @classmethod
    def point(cls, value: int) -> "ParameterRange":
        return cls(min=value, max=value)


class NoiseHypercube(BaseModel):
    """
    多噪声分类超立方体：六个维度的参数区间加一个标量偏移（均为定点值）。
    """
    temperature: ParameterRange
    humidity: ParameterRange
    continentalness: ParameterRange
    erosion: ParameterRange
    depth: ParameterRange
    weirdness: ParameterRange
    offset: int = 0

    class Config:
        frozen = True


# 超立方体序列化的固定维度顺序（非字母序，下游消费方依赖此顺序）
HYPERCUBE_DIMENSIONS = ("temperature", "humidity", "continentalness", "erosion", "depth", "weirdness")


class ParameterList(BaseModel):
    """
    参数列表：超立方体 → 结果标识符（生物群系）。

    结果标识符为 None 表示宿主中该条目的键无法解析。
    """
    entries: List[Tuple[NoiseHypercube, Optional[Identifier]]] = []
