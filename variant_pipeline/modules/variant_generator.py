"""Generate tier variants pairing a recolored texture with scaled stats."""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from PIL import Image

from ..core import config
from ..core.utils_image import PixelGrid, as_grid, load_grid
from ..core.utils_io import SafeFileManager, ensure_dir, load_stats_table
from ..core.utils_parallel import limited_threads, run_parallel
from .stats import (
    MaterialTables,
    Tier,
    TierStats,
    default_tables,
    scale_stats,
    scale_stats_with_reference,
)
from .texture import apply_tonal_profile, recolor

LOGGER = logging.getLogger("variant_pipeline.variants")

VariantKey = Tuple[str, str, Tier]


@dataclass
class Variant:
    """A generated variant texture with its derived statistics."""

    name: str
    source: str
    tier: Tier
    grid: PixelGrid
    stats: Optional[TierStats] = None
    output_path: Optional[Path] = None

    @property
    def key(self) -> VariantKey:
        return (self.source, self.name, self.tier)

    def __str__(self) -> str:
        return f"Variant{{source={self.source}, item={self.name}, tier={self.tier.display_name}}}"


class VariantRegistry:
    """Thread-safe store of generated variants owned by one generator run."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._variants: Dict[VariantKey, Variant] = {}

    def register(self, variant: Variant) -> None:
        with self._lock:
            self._variants[variant.key] = variant
        LOGGER.info("Registered variant: %s", variant)

    def get(self, source: str, name: str, tier: Tier) -> Optional[Variant]:
        with self._lock:
            return self._variants.get((source, name, tier))

    def for_tier(self, tier: Tier) -> List[Variant]:
        with self._lock:
            return [variant for variant in self._variants.values() if variant.tier is tier]

    def for_source(self, source: str) -> List[Variant]:
        with self._lock:
            return [variant for variant in self._variants.values() if variant.source == source]

    def all(self) -> List[Variant]:
        with self._lock:
            return list(self._variants.values())

    def clear(self) -> None:
        with self._lock:
            self._variants.clear()
        LOGGER.info("Cleared variant registry")

    def __len__(self) -> int:
        with self._lock:
            return len(self._variants)


class VariantGenerator:
    """Create higher tier variants for base tier textures and stats."""

    def __init__(
        self,
        cfg: Mapping[str, object],
        tables: Optional[MaterialTables] = None,
        registry: Optional[VariantRegistry] = None,
        item_stats: Optional[Mapping[str, TierStats]] = None,
    ) -> None:
        self.config = dict(config.validate_config(cfg))
        self.input_path = Path(self.config.get("PATH_INPUT", config.PATH_INPUT))  # type: ignore[arg-type]
        self.output_path = Path(self.config.get("PATH_OUTPUT", config.PATH_OUTPUT))  # type: ignore[arg-type]
        self.tables = tables or default_tables()
        palettes = self.config.get("PALETTES") or {}
        for tier_name, (bright, dark) in dict(palettes).items():  # type: ignore[call-overload]
            self.tables.set_palette(Tier.from_name(str(tier_name)), bright, dark)
        self.registry = registry or VariantRegistry()
        self.logger = LOGGER
        self.target_tiers: Tuple[Tier, ...] = tuple(
            Tier.from_name(str(name)) for name in self.config.get("TARGET_TIERS", ("MID", "TOP"))  # type: ignore[union-attr]
        )
        self.scan_patterns: Tuple[str, ...] = tuple(
            str(p).lower() for p in self.config.get("SCAN_PATTERNS", ("iron",))  # type: ignore[union-attr]
        )
        self.extensions = {str(e).lower() for e in self.config.get("EXTENSIONS", (".png",))}  # type: ignore[union-attr]
        self.multipliers: Dict[Tier, float] = {
            Tier.BASE: Tier.BASE.multiplier,
            Tier.MID: float(self.config.get("MID_MULTIPLIER", Tier.MID.multiplier)),  # type: ignore[arg-type]
            Tier.TOP: float(self.config.get("TOP_MULTIPLIER", Tier.TOP.multiplier)),  # type: ignore[arg-type]
        }
        self.use_reference_stats = bool(self.config.get("USE_REFERENCE_STATS", False))
        if item_stats is None:
            stats_file = self.config.get("STATS_FILE")
            raw = load_stats_table(Path(stats_file) if stats_file else None)  # type: ignore[arg-type]
            item_stats = {name: TierStats.from_mapping(values) for name, values in raw.items()}
        self.item_stats: Dict[str, TierStats] = dict(item_stats)
        self._stats_lock = threading.Lock()
        self._images_processed = 0
        self._variants_generated = 0
        self._total_image_time = 0.0
        self.logger.debug("Variant generator configured with %s", self.config)

    # Single variant ------------------------------------------------------
    def generate_texture(self, grid: PixelGrid | Image.Image, tier: Tier) -> PixelGrid:
        """Recolor *grid* with the palette of *tier* and apply its tonal profile."""

        palette = self.tables.palette(tier)
        recolored = recolor(grid, palette.bright, palette.dark)
        return apply_tonal_profile(recolored, palette.tonal)

    def generate_stats(self, base: TierStats, tier: Tier) -> TierStats:
        multiplier = self.multipliers[tier]
        if self.use_reference_stats:
            high, low = self.tables.references_for(base, tier)
            return scale_stats_with_reference(base, high, low, tier, default_multiplier=multiplier)
        return scale_stats(base, tier, multiplier=multiplier)

    def generate_variant(
        self,
        name: str,
        grid: PixelGrid | Image.Image,
        tier: Tier,
        base_stats: Optional[TierStats] = None,
        *,
        source: str = "",
    ) -> Variant:
        self.logger.debug("Generating %s variant for %s", tier.display_name, name)
        texture = self.generate_texture(grid, tier)
        stats = self.generate_stats(base_stats, tier) if base_stats is not None else None
        return Variant(name=name, source=source, tier=tier, grid=texture, stats=stats)

    def generate_variants(
        self,
        name: str,
        grid: PixelGrid | Image.Image,
        base_stats: Optional[TierStats] = None,
        *,
        source: str = "",
    ) -> List[Variant]:
        """Generate one variant per configured target tier."""

        rgba = as_grid(grid)
        return [self.generate_variant(name, rgba, tier, base_stats, source=source) for tier in self.target_tiers]

    # Batch run -----------------------------------------------------------
    def _iter_input_files(self) -> Iterator[Path]:
        for entry in sorted(self.input_path.rglob("*")):
            if not entry.is_file() or entry.suffix.lower() not in self.extensions:
                continue
            if any(pattern in entry.name.lower() for pattern in self.scan_patterns):
                yield entry

    def _output_name(self, filename: str, tier: Tier) -> str:
        lowered = filename.lower()
        replacement = tier.display_name.lower()
        for pattern in self.scan_patterns:
            if pattern in lowered:
                start = lowered.index(pattern)
                return filename[:start] + replacement + filename[start + len(pattern):]
        stem, suffix = Path(filename).stem, Path(filename).suffix
        return f"{stem}_{replacement}{suffix}"

    def _process_file(self, path: Path) -> List[Variant]:
        self.logger.info("Generating variants for %s", path.name)
        process_start = time.perf_counter()
        relative = path.relative_to(self.input_path)
        source = relative.parts[0] if len(relative.parts) > 1 else ""
        grid = load_grid(path)
        variants = self.generate_variants(path.stem, grid, self.item_stats.get(path.stem), source=source)
        file_manager = SafeFileManager(ensure_dir(self.output_path / relative.parent))
        for variant in variants:
            variant.output_path = file_manager.atomic_save(variant.grid, self._output_name(path.name, variant.tier))
            self.registry.register(variant)
        elapsed = time.perf_counter() - process_start
        with self._stats_lock:
            self._images_processed += 1
            self._variants_generated += len(variants)
            self._total_image_time += elapsed
        return variants

    def run(self, *, threads: Optional[int] = None) -> List[Variant]:
        """Process the input directory and write every variant texture."""

        workers = int(threads or self.config.get("THREADS", 1))  # type: ignore[arg-type]
        if not self.input_path.exists():
            self.logger.warning("Input directory %s does not exist", self.input_path)
            return []
        files: Sequence[Path] = list(self._iter_input_files())
        if not files:
            self.logger.warning("No base tier textures found in %s", self.input_path)
            return []
        self.logger.info("Found %d textures to generate variants for", len(files))
        start_time = time.perf_counter()
        with limited_threads(workers):
            batches = run_parallel(self._process_file, files, max_workers=workers)
        total_time = time.perf_counter() - start_time
        with self._stats_lock:
            images = self._images_processed
            variants = self._variants_generated
            total_image_time = self._total_image_time
        avg_variants = variants / images if images else 0.0
        avg_time = total_image_time / images if images else 0.0
        self.logger.info(
            "Images processed: %d, variants per image: %.2f, time per image: %.2fs, total time: %.2fs",
            images,
            avg_variants,
            avg_time,
            total_time,
        )
        return [variant for batch in batches for variant in batch]
