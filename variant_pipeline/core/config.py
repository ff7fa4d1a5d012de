"""Configuration module for the tier variant pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Mapping, MutableMapping, Optional, Tuple


BASE_DIR = Path(__file__).resolve().parent.parent

PATH_INPUT = BASE_DIR / "input"
PATH_OUTPUT = BASE_DIR / "variants"

MID_MULTIPLIER = 1.25
TOP_MULTIPLIER = 1.5
USE_REFERENCE_STATS = False


@dataclass
class PipelineConfig:
    """Runtime configuration for the variant pipeline."""

    input_path: Path = PATH_INPUT
    output_path: Path = PATH_OUTPUT
    target_tiers: Iterable[str] = ("MID", "TOP")
    scan_patterns: Iterable[str] = ("iron",)
    mid_multiplier: float = MID_MULTIPLIER
    top_multiplier: float = TOP_MULTIPLIER
    use_reference_stats: bool = USE_REFERENCE_STATS
    stats_file: Optional[Path] = None
    threads: int = 8
    log_file: Path = BASE_DIR / "processing.log"
    extensions: Iterable[str] = field(default_factory=lambda: (".png",))
    palettes: Mapping[str, Tuple[object, object]] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, object]:
        """Return the configuration as a plain dictionary."""

        return {
            "PATH_INPUT": self.input_path,
            "PATH_OUTPUT": self.output_path,
            "TARGET_TIERS": tuple(self.target_tiers),
            "SCAN_PATTERNS": tuple(self.scan_patterns),
            "MID_MULTIPLIER": self.mid_multiplier,
            "TOP_MULTIPLIER": self.top_multiplier,
            "USE_REFERENCE_STATS": self.use_reference_stats,
            "STATS_FILE": self.stats_file,
            "THREADS": self.threads,
            "LOG_FILE": self.log_file,
            "EXTENSIONS": tuple(self.extensions),
            "PALETTES": dict(self.palettes),
        }


def build_config(overrides: Optional[Mapping[str, object]] = None) -> Dict[str, object]:
    """Create a configuration dictionary with optional overrides."""

    config = PipelineConfig()
    if overrides:
        mutable: MutableMapping[str, object] = config.as_dict()
        for key, value in overrides.items():
            if key in mutable:
                mutable[key] = value
        return dict(mutable)
    return config.as_dict()


def validate_config(cfg: Mapping[str, object]) -> Mapping[str, object]:
    """Check multiplier ordering and worker count, raising ``ValueError``."""

    mid = float(cfg.get("MID_MULTIPLIER", MID_MULTIPLIER))  # type: ignore[arg-type]
    top = float(cfg.get("TOP_MULTIPLIER", TOP_MULTIPLIER))  # type: ignore[arg-type]
    if mid < 1.0:
        raise ValueError("Mid tier multiplier must be >= 1.0")
    if top < mid:
        raise ValueError("Top tier multiplier must be >= mid tier multiplier")
    if int(cfg.get("THREADS", 1)) < 1:  # type: ignore[arg-type]
        raise ValueError("Thread count must be positive")
    return cfg
