"""Tier statistic scaling for generated variants."""
from __future__ import annotations

from .models import ArmorMaterialStats, Tier, TierStats, ToolStats
from .scaling import ReferenceRecord, reference_multiplier, scale_stats, scale_stats_with_reference
from .tables import MaterialTables, TierPalette, default_tables

__all__ = [
    "ArmorMaterialStats",
    "Tier",
    "TierStats",
    "ToolStats",
    "ReferenceRecord",
    "reference_multiplier",
    "scale_stats",
    "scale_stats_with_reference",
    "MaterialTables",
    "TierPalette",
    "default_tables",
]
