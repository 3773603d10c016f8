"""
Extractors module: one extractor per host registry.

Provides:
- BaseExtractor: Abstract base class with the file_name()/extract() interface
- ChunkStatusExtractor: chunk_status.json (array of stage names)
- NoiseParametersExtractor: noise_parameters.json (object of noise records)
- MultiNoiseExtractor: multi_noise.json (parameter list -> biome -> cube)
"""

from extractor.extractors.base import BaseExtractor
from extractor.extractors.chunk_status import ChunkStatusExtractor
from extractor.extractors.noise_parameters import NoiseParametersExtractor
from extractor.extractors.multi_noise import MultiNoiseExtractor

__all__ = [
    "BaseExtractor",
    "ChunkStatusExtractor",
    "NoiseParametersExtractor",
    "MultiNoiseExtractor",
]
