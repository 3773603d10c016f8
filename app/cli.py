import argparse
import logging
from typing import List, Optional

from extractor.config import get_settings
from extractor.errors import ExtractionError
from extractor.extract.registry import ExtractorRegistry
from extractor.logger import get_logger, set_level

from app.backend.process import process_snapshot

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Dump host registries from a snapshot into one JSON file per extractor."
    )
    parser.add_argument(
        "--snapshot",
        default=settings.SNAPSHOT_PATH,
        help="Path to a YAML or JSON registry snapshot (default: env SNAPSHOT_PATH).",
    )
    parser.add_argument(
        "--output-dir",
        default=settings.OUTPUT_DIR,
        help="Directory to write output JSON files (default: env OUTPUT_DIR).",
    )
    parser.add_argument(
        "--only",
        nargs="+",
        default=None,
        metavar="FILE_NAME",
        help="Run only these extractors, by output file name (e.g. multi_noise.json).",
    )
    parser.add_argument(
        "--strict-keys",
        action=argparse.BooleanOptionalAction,
        default=settings.STRICT_KEYS,
        help="Fail on duplicate output keys instead of keeping the last value (default: env STRICT_KEYS).",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=settings.JSON_INDENT,
        help="JSON indent; 0 writes compact output.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available extractors and exit.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help="Logging level (default: env LOG_LEVEL).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    level = logging.getLevelName(str(args.log_level).upper())
    if not isinstance(level, int):
        logger.error("Unknown log level: %s", args.log_level)
        return 1
    set_level(level)

    if args.list:
        for name in ExtractorRegistry().names():
            print(name)
        return 0

    if not args.snapshot:
        logger.error("No snapshot given (use --snapshot or set SNAPSHOT_PATH).")
        return 1
    if args.indent < 0:
        logger.error("--indent must be >= 0, got %d", args.indent)
        return 1

    try:
        written = process_snapshot(
            snapshot_path=args.snapshot,
            output_dir=args.output_dir,
            only=args.only,
            strict_keys=args.strict_keys,
            indent=args.indent,
        )
    except (ExtractionError, FileNotFoundError, KeyError, ValueError) as e:
        logger.error("Extraction aborted, no output published: %s", e)
        return 1

    for path in written:
        print(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
