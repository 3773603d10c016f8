"""
噪声参数提取器 (Noise Parameters Extractor)
=========================================

每个噪声参数条目输出为 {"first_octave": int, "amplitudes": [float, ...]}，
以条目标识符的 path 部分为键。
"""
from typing import Any, Dict

from extractor.extractors.base import BaseExtractor
from extractor.host import RegistryKeys, ServerHandle
from extractor.ir import NoiseParameters


def noise_parameters_to_json(noise: NoiseParameters) -> Dict[str, Any]:
    return {
        "first_octave": noise.first_octave,
        # amplitudes are indexed by octave offset, source order must be kept
        "amplitudes": [float(a) for a in noise.amplitudes],
    }


class NoiseParametersExtractor(BaseExtractor):
    """noise_parameters.json: object of per-noise records keyed by path."""

    def file_name(self) -> str:
        return "noise_parameters.json"

    def extract(self, server: ServerHandle) -> Dict[str, Any]:
        registry = server.registry(RegistryKeys.NOISE_PARAMETERS)
        noises: Dict[str, Any] = {}
        for entry in registry:
            key = self._entry_path(entry)
            self._put(noises, key, noise_parameters_to_json(entry.value), self.file_name())
        return noises
