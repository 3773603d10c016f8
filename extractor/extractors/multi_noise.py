"""
多噪声参数列表提取器 (Multi-Noise Parameter List Extractor)
=========================================================

输出两层嵌套对象:
    外层键 = 参数列表标识符的 path 部分（如 "overworld"）
    内层键 = 结果生物群系的完整标识符（如 "minecraft:plains"）
    值     = 序列化后的超立方体

超立方体序列化的字段顺序固定为:
    temperature, humidity, continentalness, erosion, depth, weirdness, offset
每个区间为 [min, max]，偏移量为标量，均经 codec.decode 从定点数还原。
"""
from typing import Any, Dict

from extractor import codec
from extractor.errors import MalformedIdentifierError
from extractor.extractors.base import BaseExtractor
from extractor.host import RegistryKeys, ServerHandle
from extractor.ir import HYPERCUBE_DIMENSIONS, NoiseHypercube, ParameterList


def hypercube_to_json(hypercube: NoiseHypercube) -> Dict[str, Any]:
    """将超立方体转换为 JSON 对象（固定字段顺序，非字母序）。"""
    cube: Dict[str, Any] = {}
    for dimension in HYPERCUBE_DIMENSIONS:
        cube[dimension] = codec.decode_range(getattr(hypercube, dimension))
    cube["offset"] = codec.decode(hypercube.offset)
    return cube


class MultiNoiseExtractor(BaseExtractor):
    """multi_noise.json: parameter list path -> biome identifier -> cube."""

    def file_name(self) -> str:
        return "multi_noise.json"

    def extract(self, server: ServerHandle) -> Dict[str, Any]:
        registry = server.registry(RegistryKeys.MULTI_NOISE_PARAMETER_LIST)
        root: Dict[str, Any] = {}
        for entry in registry:
            key_path = self._entry_path(entry)
            self._put(root, key_path, self._parameter_list_to_json(key_path, entry.value), self.file_name())
        return root

    def _parameter_list_to_json(self, key_path: str, parameter_list: ParameterList) -> Dict[str, Any]:
        # an empty list still yields an (empty) object under its key
        list_json: Dict[str, Any] = {}
        scope = f"{self.file_name()}[{key_path}]"
        for hypercube, biome in parameter_list.entries:
            if biome is None:
                raise MalformedIdentifierError(f"{scope}: biome entry has no resolvable identifier")
            self._put(list_json, str(biome), hypercube_to_json(hypercube), scope)
        return list_json
