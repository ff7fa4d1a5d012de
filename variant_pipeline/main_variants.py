"""Command line interface for the tier variant pipeline."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, Optional, Sequence

from .core import config

LOGGER = logging.getLogger("variant_pipeline.main_variants")


class BoolAction(argparse.Action):
    """Robust boolean flag parser supporting affirmative and negative forms."""

    def __call__(self, parser, namespace, values, option_string=None):  # type: ignore[override]
        if values is None:
            setattr(namespace, self.dest, True)
            return
        normalized = str(values).strip().lower()
        if normalized in {"1", "y", "yes", "t", "true", "on"}:
            setattr(namespace, self.dest, True)
        elif normalized in {"0", "n", "no", "f", "false", "off"}:
            setattr(namespace, self.dest, False)
        else:
            raise argparse.ArgumentTypeError(f"Invalid boolean for {option_string}: {values!r}")


def _configure_logging(log_path: Path) -> None:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", "%Y-%m-%d %H:%M:%S")
    file_handler = logging.FileHandler(log_path, encoding="utf-8", delay=True)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logging.basicConfig(level=logging.INFO, handlers=[file_handler, console_handler])


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate higher tier texture and stat variants")
    parser.add_argument("--input", type=Path, default=config.PATH_INPUT, help="Directory with base tier textures")
    parser.add_argument("--output", type=Path, default=config.PATH_OUTPUT, help="Directory to write generated variants")
    parser.add_argument("--threads", type=int, default=8, help="Number of worker threads")
    parser.add_argument(
        "--tiers",
        nargs="+",
        default=["MID", "TOP"],
        help="Target tiers by name (BASE/MID/TOP or Iron/Netherite/Enderite)",
    )
    parser.add_argument(
        "--pattern",
        dest="patterns",
        action="append",
        default=None,
        help="File name fragment marking base tier textures (repeatable, default: iron)",
    )
    parser.add_argument("--mid-multiplier", type=float, default=config.MID_MULTIPLIER, help="Mid tier stat multiplier")
    parser.add_argument("--top-multiplier", type=float, default=config.TOP_MULTIPLIER, help="Top tier stat multiplier")
    parser.add_argument(
        "--reference-stats",
        nargs="?",
        default=config.USE_REFERENCE_STATS,
        action=BoolAction,
        help="Scale stats by reference material durability ratios (default: false)",
    )
    parser.add_argument(
        "--no-reference-stats",
        dest="reference_stats",
        action="store_false",
        help="Scale stats by the fixed tier multipliers",
    )
    parser.add_argument(
        "--palette",
        dest="palettes",
        nargs=3,
        action="append",
        metavar=("TIER", "BRIGHT", "DARK"),
        default=None,
        help="Override the recolor endpoints of a tier, e.g. --palette TOP '#1d5e53' '#040e0c'",
    )
    parser.add_argument("--stats", type=Path, default=None, help="JSON file mapping item names to base stats")
    parser.add_argument("--log-file", type=Path, default=None, help="Log file path")
    return parser.parse_args(argv)


def build_runtime_config(args: argparse.Namespace) -> Dict[str, object]:
    overrides: Dict[str, object] = {
        "PATH_INPUT": args.input.resolve(),
        "PATH_OUTPUT": args.output.resolve(),
        "THREADS": args.threads,
        "TARGET_TIERS": tuple(args.tiers),
        "MID_MULTIPLIER": args.mid_multiplier,
        "TOP_MULTIPLIER": args.top_multiplier,
        "USE_REFERENCE_STATS": args.reference_stats,
        "STATS_FILE": args.stats.resolve() if args.stats else None,
    }
    if args.palettes:
        overrides["PALETTES"] = {tier: (bright, dark) for tier, bright, dark in args.palettes}
    if args.patterns:
        overrides["SCAN_PATTERNS"] = tuple(args.patterns)
    if args.log_file:
        overrides["LOG_FILE"] = args.log_file.resolve()
    return config.build_config(overrides)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    cfg = build_runtime_config(args)
    try:
        config.validate_config(cfg)
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc
    _configure_logging(Path(cfg["LOG_FILE"]))  # type: ignore[arg-type]
    LOGGER.info(
        "CLI flags resolved -> tiers=%s, reference_stats=%s, threads=%s",
        cfg["TARGET_TIERS"],
        cfg["USE_REFERENCE_STATS"],
        cfg["THREADS"],
    )
    from .modules.variant_generator import VariantGenerator

    try:
        generator = VariantGenerator(cfg)
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc
    generator.run(threads=args.threads)


if __name__ == "__main__":
    main()
