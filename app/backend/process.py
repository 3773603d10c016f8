"""
后端处理模块 (Backend Process Module)
====================================

封装导出流程：加载注册表快照 → 运行提取器 → 每个提取器写出一个 JSON 文件。
所有文档先写入暂存目录，全部成功后才移动到输出目录；移动失败时回滚已发布的文件。
"""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from extractor.extract.registry import ExtractorRegistry
from extractor.logger import get_logger
from extractor.pipeline import run_extract
from extractor.snapshot import load_server_snapshot

logger = get_logger(__name__)


def ensure_output_dir(output_dir: str) -> Path:
    """确保输出目录存在，不存在则创建。"""
    output_path = Path(output_dir).resolve()
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path


def render_document(document: Any, indent: Optional[int] = 2) -> str:
    """将 JSON 文档渲染为文本；NaN/Infinity 不是合法 JSON，直接报错。"""
    return json.dumps(document, ensure_ascii=False, indent=indent or None, allow_nan=False) + "\n"


def _rollback(published: List[Path], backup: Path) -> None:
    """撤销已发布的文件，并恢复被覆盖的旧文件。"""
    for final_path in reversed(published):
        if final_path.exists():
            final_path.unlink()
        previous = backup / final_path.name
        if previous.exists():
            os.replace(previous, final_path)
    logger.warning("Rolled back %d published files", len(published))


def write_documents(
    documents: Dict[str, Any],
    output_dir: str,
    indent: Optional[int] = 2,
) -> List[str]:
    """
    将 {文件名: 文档} 写入 output_dir，返回写出的文件路径列表。

    先在 output_dir 下的暂存目录中写出全部文件，再逐个移动到最终位置。
    被覆盖的旧文件先移入暂存目录；移动过程中任一步失败，已发布的文件会被撤销并恢复旧文件。
    """
    output_path = ensure_output_dir(output_dir)
    staging = Path(tempfile.mkdtemp(prefix=".staging-", dir=str(output_path)))
    backup = staging / ".previous"
    written: List[str] = []
    try:
        staged = []
        for file_name, document in documents.items():
            staged_path = staging / file_name
            staged_path.write_text(render_document(document, indent), encoding="utf-8")
            staged.append(staged_path)
        backup.mkdir()
        published: List[Path] = []
        try:
            for staged_path in staged:
                final_path = output_path / staged_path.name
                if final_path.exists():
                    os.replace(final_path, backup / staged_path.name)
                published.append(final_path)
                os.replace(staged_path, final_path)
        except OSError:
            _rollback(published, backup)
            raise
        for final_path in published:
            written.append(str(final_path))
            logger.info("Wrote %s", final_path)
    finally:
        shutil.rmtree(staging, ignore_errors=True)
    return written


def process_snapshot(
    snapshot_path: str,
    output_dir: str,
    only: Optional[Iterable[str]] = None,
    strict_keys: bool = False,
    indent: Optional[int] = 2,
) -> List[str]:
    """
    加载快照并导出全部（或 only 指定的）提取器输出。

    任何提取错误都会向上抛出，此时不会写出任何文件。
    """
    server = load_server_snapshot(snapshot_path)
    registry = ExtractorRegistry(strict_keys=strict_keys)
    documents = run_extract(server, registry, only=only)
    return write_documents(documents, output_dir, indent=indent)
