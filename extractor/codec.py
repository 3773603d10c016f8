"""
数值编解码模块 (Numeric Codec Module)
====================================

宿主以定点整数存储多噪声参数区间的边界与偏移量：实数 x 存为 round(x * 10000)。
本模块负责将定点整数还原为浮点数以写入 JSON，缩放因子必须与宿主完全一致。

宿主的 toFloat 以单精度计算 (float) v / 10000.0F；这里刻意以双精度计算 v / 10000.0，
使输出为最短的十进制表示（如 -4500 → -0.45）。在取值范围 [-2, 2] 内两者的 JSON 文本一致。
"""

import math
from typing import List

from extractor.errors import FixedPointDecodeError

# 宿主的定点缩放因子（与宿主版本绑定，不可随意修改）
FIXED_POINT_SCALE = 10000

# 宿主以 64 位有符号整数存储定点值
_MIN_FIXED = -(2 ** 63)
_MAX_FIXED = 2 ** 63 - 1


def decode(value: int) -> float:
    """
    将宿主的定点整数解码为浮点数。

    参数:
        value: 定点整数

    返回:
        value / FIXED_POINT_SCALE

    抛出:
        FixedPointDecodeError: 输入不是整数或超出 64 位有符号范围
    """
    # bool is an int subclass but never a valid boundary
    if isinstance(value, bool) or not isinstance(value, int):
        raise FixedPointDecodeError(f"Fixed-point value must be an integer, got {type(value).__name__}: {value!r}")
    if value < _MIN_FIXED or value > _MAX_FIXED:
        raise FixedPointDecodeError(f"Fixed-point value out of 64-bit range: {value}")
    return value / float(FIXED_POINT_SCALE)


def encode(value: float) -> int:
    """将浮点数编码为宿主定点整数（decode 的逆运算，用于构造快照与测试数据）。"""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise FixedPointDecodeError(f"Cannot encode non-finite or non-numeric value: {value!r}")
    encoded = int(round(value * FIXED_POINT_SCALE))
    if encoded < _MIN_FIXED or encoded > _MAX_FIXED:
        raise FixedPointDecodeError(f"Encoded value out of 64-bit range: {value}")
    return encoded


def decode_range(parameter_range) -> List[float]:
    """Serialize a ParameterRange as ``[min, max]`` in the decoded domain."""
    return [decode(parameter_range.min), decode(parameter_range.max)]
