"""
注册表快照加载模块 (Registry Snapshot Loader Module)
==================================================

从 YAML / JSON 注册表转储文件构造 ServerHandle，供 CLI 在没有运行中宿主时使用。

快照结构（顶层键为注册表名称）:

    chunk_status:
      - minecraft:empty
      - minecraft:full
    worldgen/noise:
      minecraft:temperature: {first_octave: -10, amplitudes: [1.5, 0.0, 1.0]}
    worldgen/multi_noise_biome_source_parameter_list:
      minecraft:overworld:
        - biome: minecraft:plains
          parameters:
            temperature: [-4500, -1500]   # 定点整数区间
            depth: 0                      # 单个定点整数 = 退化区间
            offset: 0

其他未知顶层键按标量注册表（标识符列表）加载。
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from extractor.errors import SnapshotFormatError
from extractor.host import Registry, RegistryEntry, RegistryKeys, ServerHandle
from extractor.ir import HYPERCUBE_DIMENSIONS, Identifier, NoiseHypercube, NoiseParameters, ParameterList, ParameterRange
from extractor.logger import get_logger

logger = get_logger(__name__)


def _parse_key(raw: Any, where: str) -> Optional[Identifier]:
    """解析快照中的标识符；null 保留为 None（表示宿主中不可解析的键）。"""
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise SnapshotFormatError(f"{where}: identifier must be a string, got {raw!r}")
    return Identifier.parse(raw)


def _ensure_mapping(value: Any, where: str) -> Dict[Any, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SnapshotFormatError(f"{where}: expected a mapping, got {type(value).__name__}")
    return value


def _ensure_list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SnapshotFormatError(f"{where}: expected a list, got {type(value).__name__}")
    return value


def _is_fixed(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_range(raw: Any, where: str) -> ParameterRange:
    """单个定点整数 → 退化区间；[min, max] → 闭区间。"""
    if _is_fixed(raw):
        return ParameterRange.point(raw)
    if isinstance(raw, list) and len(raw) == 2 and all(_is_fixed(v) for v in raw):
        try:
            return ParameterRange(min=raw[0], max=raw[1])
        except ValidationError as exc:
            raise SnapshotFormatError(f"{where}: {exc.errors()[0]['msg']}") from exc
    raise SnapshotFormatError(f"{where}: expected a fixed-point integer or [min, max], got {raw!r}")


def _build_scalar_registry(key: str, raw: Any) -> Registry:
    items = _ensure_list(raw, key)
    return Registry(key, [
        RegistryEntry(key=_parse_key(item, f"{key}[{i}]"), value=item)
        for i, item in enumerate(items)
    ])


def _build_noise_registry(key: str, raw: Any) -> Registry:
    entries = []
    for name, record in _ensure_mapping(raw, key).items():
        where = f"{key}.{name}"
        try:
            value = NoiseParameters(**_ensure_mapping(record, where))
        except (TypeError, ValidationError) as exc:
            raise SnapshotFormatError(f"{where}: invalid noise parameters: {exc}") from exc
        entries.append(RegistryEntry(key=_parse_key(name, where), value=value))
    return Registry(key, entries)


def _build_hypercube(raw: Any, where: str) -> NoiseHypercube:
    params = _ensure_mapping(raw, where)
    missing = [dim for dim in HYPERCUBE_DIMENSIONS if dim not in params]
    if missing:
        raise SnapshotFormatError(f"{where}: missing dimensions {missing}")
    offset = params.get("offset", 0)
    if not _is_fixed(offset):
        raise SnapshotFormatError(f"{where}.offset: expected a fixed-point integer, got {offset!r}")
    ranges = {dim: _parse_range(params[dim], f"{where}.{dim}") for dim in HYPERCUBE_DIMENSIONS}
    return NoiseHypercube(offset=offset, **ranges)


def _build_multi_noise_registry(key: str, raw: Any) -> Registry:
    entries = []
    for name, points in _ensure_mapping(raw, key).items():
        where = f"{key}.{name}"
        pairs = []
        for i, point in enumerate(_ensure_list(points, where)):
            point_where = f"{where}[{i}]"
            point = _ensure_mapping(point, point_where)
            if "biome" not in point:
                raise SnapshotFormatError(f"{point_where}: missing 'biome'")
            cube = _build_hypercube(point.get("parameters"), f"{point_where}.parameters")
            pairs.append((cube, _parse_key(point["biome"], f"{point_where}.biome")))
        entries.append(RegistryEntry(key=_parse_key(name, where), value=ParameterList(entries=pairs)))
    return Registry(key, entries)


_BUILDERS = {
    RegistryKeys.CHUNK_STATUS: _build_scalar_registry,
    RegistryKeys.NOISE_PARAMETERS: _build_noise_registry,
    RegistryKeys.MULTI_NOISE_PARAMETER_LIST: _build_multi_noise_registry,
}


def build_server_handle(data: Dict[str, Any]) -> ServerHandle:
    """从已解析的快照字典构造 ServerHandle。"""
    data = _ensure_mapping(data, "snapshot")
    registries = {}
    for key, raw in data.items():
        if not isinstance(key, str):
            raise SnapshotFormatError(f"Registry name must be a string, got {key!r}")
        builder = _BUILDERS.get(key, _build_scalar_registry)
        registries[key] = builder(key, raw)
        logger.debug("Loaded registry %s (%d entries)", key, len(registries[key]))
    return ServerHandle(registries)


def load_server_snapshot(snapshot_path: Union[str, Path]) -> ServerHandle:
    """
    加载快照文件（.json 按 JSON 解析，其余按 YAML 解析）。

    抛出:
        FileNotFoundError: 文件不存在
        SnapshotFormatError: 文件无法解析或结构不合法
    """
    path = Path(snapshot_path).expanduser()
    if not path.is_file():
        raise FileNotFoundError(f"Snapshot not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SnapshotFormatError(f"Failed to parse snapshot {path}: {exc}") from exc
    server = build_server_handle(data)
    logger.info("Loaded snapshot %s: registries=%s", path, server.registry_keys())
    return server
