"""CLI entry point for the screener.

Usage:
    python -m tascreen --list-presets
    python -m tascreen --data securities.json --preset oversold
    python -m tascreen --data securities.json --filters filters.json --output matches.json
    python -m tascreen --data securities.json --preset my_setup --presets-file presets.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson
from pydantic import ValidationError

from tascreen.config import get_settings
from tascreen.models.ohlc import Security
from tascreen.models.screener import ScreenerFilter
from tascreen.screener import apply_preset, get_preset, load_presets, run_screener

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tascreen",
        description="Screen securities by technical indicator filters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m tascreen --list-presets
  python -m tascreen --data securities.json --preset oversold
  python -m tascreen --data securities.json --preset stochastic_oversold --preset volume_spike
  python -m tascreen --data securities.json --filters filters.json --locale en
        """,
    )

    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="List available presets and exit",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=None,
        help="JSON file with a list of securities (securityId, name, ohlcData, ...)",
    )
    parser.add_argument(
        "--filters",
        type=Path,
        default=None,
        help="JSON file with a list of filters",
    )
    parser.add_argument(
        "--preset",
        action="append",
        default=[],
        metavar="ID",
        help="Add the filters of a preset (repeatable)",
    )
    parser.add_argument(
        "--presets-file",
        type=Path,
        default=None,
        help="YAML file with additional presets",
    )
    parser.add_argument(
        "--locale",
        type=str,
        default=None,
        help="Locale for match descriptions (de, en)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for screening",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write results to this file instead of stdout",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def _read_json_list(path: Path, what: str) -> list:
    data = orjson.loads(path.read_bytes())
    if not isinstance(data, list):
        raise ValueError(f"{what} file {path} must contain a JSON list")
    return data


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        presets = load_presets(args.presets_file)
    except (ValueError, ValidationError) as e:
        logger.error("Invalid presets file: %s", e)
        return 2

    if args.list_presets:
        for preset in presets:
            print(f"{preset.id:<22} {preset.name} - {preset.description}")
        return 0

    if args.data is None:
        logger.error("--data is required")
        return 2

    try:
        securities = [
            Security.model_validate(record)
            for record in _read_json_list(args.data, "Data")
        ]
        filters = []
        if args.filters is not None:
            filters.extend(
                ScreenerFilter.model_validate(record)
                for record in _read_json_list(args.filters, "Filters")
            )
        for preset_id in args.preset:
            filters.extend(apply_preset(get_preset(preset_id, presets)))
    except (OSError, ValueError, ValidationError, KeyError) as e:
        logger.error("Could not load input: %s", e)
        return 2

    if not any(f.enabled for f in filters):
        logger.error("No enabled filters given (use --filters or --preset)")
        return 2

    logger.info("Loaded %d securities and %d filters", len(securities), len(filters))
    results = run_screener(
        securities,
        filters,
        settings=settings,
        locale=args.locale,
        max_workers=args.workers,
    )

    payload = orjson.dumps(
        [r.model_dump(mode="json", by_alias=True) for r in results],
        option=orjson.OPT_INDENT_2,
    )
    if args.output:
        args.output.write_bytes(payload)
        logger.info("Wrote %d results to %s", len(results), args.output)
    else:
        sys.stdout.write(payload.decode() + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
