"""
Pytest configuration and shared fixtures.

Extractors are exercised against fabricated in-memory registries; no live
server is needed.
"""
import os
import sys
import pytest

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from extractor.host import Registry, RegistryEntry, RegistryKeys, ServerHandle
from extractor.ir import Identifier, NoiseHypercube, NoiseParameters, ParameterList, ParameterRange


def make_cube(
    temperature=(0, 0),
    humidity=(0, 0),
    continentalness=(0, 0),
    erosion=(0, 0),
    depth=(0, 0),
    weirdness=(0, 0),
    offset=0,
) -> NoiseHypercube:
    """Build a hypercube from (min, max) fixed-point pairs."""
    def _r(pair):
        return ParameterRange(min=pair[0], max=pair[1])

    return NoiseHypercube(
        temperature=_r(temperature),
        humidity=_r(humidity),
        continentalness=_r(continentalness),
        erosion=_r(erosion),
        depth=_r(depth),
        weirdness=_r(weirdness),
        offset=offset,
    )


def make_parameter_list(*pairs) -> ParameterList:
    """pairs: (cube, "namespace:path" or None)"""
    return ParameterList(entries=[
        (cube, Identifier.parse(biome) if biome is not None else None) for cube, biome in pairs
    ])


@pytest.fixture
def cube_a():
    return make_cube(temperature=(-4500, -1500), humidity=(-10000, 10000), offset=0)


@pytest.fixture
def cube_b():
    return make_cube(temperature=(5500, 10000), erosion=(500, 4500), weirdness=(-4000, 4000), offset=3750)


@pytest.fixture
def server(cube_a, cube_b):
    """A fully populated server handle with all three registries."""
    return ServerHandle({
        RegistryKeys.CHUNK_STATUS: Registry.of(RegistryKeys.CHUNK_STATUS, [
            ("minecraft:empty", "empty"),
            ("minecraft:full", "full"),
            ("minecraft:light", "light"),
        ]),
        RegistryKeys.NOISE_PARAMETERS: Registry.of(RegistryKeys.NOISE_PARAMETERS, [
            ("minecraft:ridge", NoiseParameters(first_octave=-7, amplitudes=[1.0, 1.0, 2.0])),
            ("minecraft:temperature", NoiseParameters(first_octave=-10, amplitudes=[1.5, 0.0, 1.0, 0.0, 0.0, 0.0])),
        ]),
        RegistryKeys.MULTI_NOISE_PARAMETER_LIST: Registry.of(RegistryKeys.MULTI_NOISE_PARAMETER_LIST, [
            ("minecraft:overworld", make_parameter_list((cube_a, "mod:plains"), (cube_b, "mod:desert"))),
            ("minecraft:nether", make_parameter_list((cube_b, "minecraft:basalt_deltas"))),
        ]),
    })


@pytest.fixture
def empty_server():
    """All registries present but empty."""
    return ServerHandle({
        RegistryKeys.CHUNK_STATUS: Registry(RegistryKeys.CHUNK_STATUS),
        RegistryKeys.NOISE_PARAMETERS: Registry(RegistryKeys.NOISE_PARAMETERS),
        RegistryKeys.MULTI_NOISE_PARAMETER_LIST: Registry(RegistryKeys.MULTI_NOISE_PARAMETER_LIST),
    })


@pytest.fixture
def unresolvable_entry():
    return RegistryEntry(key=None, value="orphan")
