"""Owned lookup tables for tier palettes and reference material stats."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from ...core.utils_color import Pixel, parse_color
from ..texture.tonal import NEUTRAL_PROFILE, TonalProfile
from .models import ArmorMaterialStats, Tier, TierStats, ToolStats
from .scaling import ReferenceRecord

LOGGER = logging.getLogger("variant_pipeline.stats.tables")


@dataclass(frozen=True)
class TierPalette:
    """Recolor endpoints (and optional tonal tweaks) for one tier."""

    tier: Tier
    bright: Pixel
    dark: Pixel
    tonal: TonalProfile = NEUTRAL_PROFILE


DEFAULT_PALETTES: Mapping[Tier, TierPalette] = {
    Tier.BASE: TierPalette(Tier.BASE, Pixel(255, 255, 255, 255), Pixel(53, 53, 53, 255)),
    Tier.MID: TierPalette(Tier.MID, Pixel(100, 100, 120, 255), Pixel(40, 40, 50, 255)),
    Tier.TOP: TierPalette(Tier.TOP, Pixel(29, 94, 83, 255), Pixel(4, 14, 12, 255)),
}

DEFAULT_TOOL_STATS: Tuple[ToolStats, ...] = (
    ToolStats("iron", 250, 6.0, 6.0, 14),
    ToolStats("netherite", 2031, 12.0, 4.0, 15),
    ToolStats("enderite", 4096, 15.0, 2.0, 17),
)

DEFAULT_ARMOR_STATS: Tuple[ArmorMaterialStats, ...] = (
    ArmorMaterialStats("iron", 240, 9, 0.0, 0.0),
    ArmorMaterialStats("netherite", 592, 15, 3.0, 0.1),
    ArmorMaterialStats("enderite", 592, 17, 4.0, 0.1),
)


def _default_tier_materials() -> Dict[Tier, str]:
    return {tier: tier.display_name.lower() for tier in Tier}


@dataclass
class MaterialTables:
    """Palettes and reference records handed to the variant generator.

    Lookups are case-insensitive on material names; missing entries resolve
    to ``None`` so callers can fall back explicitly.
    """

    palettes: Dict[Tier, TierPalette] = field(default_factory=lambda: dict(DEFAULT_PALETTES))
    tools: Dict[str, ToolStats] = field(default_factory=dict)
    armor: Dict[str, ArmorMaterialStats] = field(default_factory=dict)
    tier_materials: Dict[Tier, str] = field(default_factory=_default_tier_materials)

    def palette(self, tier: Tier) -> TierPalette:
        palette = self.palettes.get(tier)
        if palette is None:
            LOGGER.debug("No palette for %s, using the %s palette", tier.display_name, Tier.BASE.display_name)
            return self.palettes.get(Tier.BASE, DEFAULT_PALETTES[Tier.BASE])
        return palette

    def set_palette(self, tier: Tier, bright: object, dark: object) -> TierPalette:
        """Replace the recolor endpoints of *tier*, keeping its tonal profile.

        Colors accept anything :func:`parse_color` understands, such as
        ``"#1d5e53"``, CSS names or channel sequences.
        """

        current = self.palettes.get(tier)
        tonal = current.tonal if current is not None else NEUTRAL_PROFILE
        palette = TierPalette(tier, parse_color(bright), parse_color(dark), tonal)  # type: ignore[arg-type]
        self.palettes[tier] = palette
        LOGGER.debug("Palette for %s set to %s / %s", tier.display_name, palette.bright, palette.dark)
        return palette

    def tool_stats(self, name: str) -> Optional[ToolStats]:
        return self.tools.get(name.lower())

    def armor_stats(self, name: str) -> Optional[ArmorMaterialStats]:
        return self.armor.get(name.lower())

    def register_tool(self, stats: ToolStats) -> None:
        self.tools[stats.name.lower()] = stats
        LOGGER.debug("Registered tool material: %s", stats)

    def register_armor(self, stats: ArmorMaterialStats) -> None:
        self.armor[stats.name.lower()] = stats
        LOGGER.debug("Registered armor material: %s", stats)

    def reference_pair(self, tier: Tier) -> Tuple[Optional[ToolStats], Optional[ToolStats]]:
        """Return the ``(high, low)`` tool records for scaling the base tier to *tier*."""

        high_name = self.tier_materials.get(tier)
        low_name = self.tier_materials.get(Tier.BASE)
        high = self.tool_stats(high_name) if high_name else None
        low = self.tool_stats(low_name) if low_name else None
        return high, low

    def armor_reference_pair(
        self, tier: Tier
    ) -> Tuple[Optional[ArmorMaterialStats], Optional[ArmorMaterialStats]]:
        """Return the ``(high, low)`` armor records for scaling the base tier to *tier*."""

        high_name = self.tier_materials.get(tier)
        low_name = self.tier_materials.get(Tier.BASE)
        high = self.armor_stats(high_name) if high_name else None
        low = self.armor_stats(low_name) if low_name else None
        return high, low

    def references_for(
        self, base: TierStats, tier: Tier
    ) -> Tuple[Optional[ReferenceRecord], Optional[ReferenceRecord]]:
        """Pick armor records for armor pieces and tool records for everything else."""

        if base.armor > 0:
            return self.armor_reference_pair(tier)
        return self.reference_pair(tier)


def default_tables() -> MaterialTables:
    """Build tables populated with the built-in palettes and material records."""

    tables = MaterialTables()
    for tool in DEFAULT_TOOL_STATS:
        tables.register_tool(tool)
    for armor in DEFAULT_ARMOR_STATS:
        tables.register_armor(armor)
    return tables
