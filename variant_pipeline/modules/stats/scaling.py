"""Derive variant tier statistics from a base tier record."""
from __future__ import annotations

import logging
import math
from typing import Optional, Union

from .models import ArmorMaterialStats, TierStats, Tier, ToolStats

LOGGER = logging.getLogger("variant_pipeline.stats.scaling")

ENCHANTABILITY_BOOST = 1.1

ReferenceRecord = Union[ToolStats, ArmorMaterialStats]


def _apply_multiplier(base: TierStats, multiplier: float) -> TierStats:
    scaled = base.copy()

    # Tool properties
    if scaled.mining_speed > 0:
        scaled.mining_speed *= multiplier
    if scaled.attack_damage > 0:
        scaled.attack_damage *= multiplier
    if scaled.durability > 0:
        scaled.durability = int(scaled.durability * multiplier)

    # Armor properties
    if scaled.armor > 0:
        scaled.armor = int(math.ceil(scaled.armor * multiplier))
    if scaled.toughness > 0:
        scaled.toughness *= multiplier

    if scaled.enchantability > 0:
        boosted = int(math.floor(scaled.enchantability * ENCHANTABILITY_BOOST * multiplier))
        scaled.enchantability = max(scaled.enchantability, boosted)

    return scaled


def scale_stats(base: TierStats, tier: Tier, *, multiplier: Optional[float] = None) -> TierStats:
    """Scale *base* to *tier* using the tier's fixed multiplier.

    Stats that are zero stay zero. Durability truncates, armor rounds up and
    enchantability receives a dampened boost that never lowers it. An explicit
    *multiplier* replaces the tier default.
    """

    factor = tier.multiplier if multiplier is None else float(multiplier)
    LOGGER.debug("Scaling stats to %s with multiplier %s", tier.display_name, factor)
    return _apply_multiplier(base, factor)


def reference_multiplier(
    high_ref: Optional[ReferenceRecord], low_ref: Optional[ReferenceRecord]
) -> Optional[float]:
    """Return ``high_ref.durability / low_ref.durability`` or ``None`` if unusable."""

    if high_ref is None or low_ref is None or low_ref.durability <= 0:
        return None
    return high_ref.durability / low_ref.durability


def scale_stats_with_reference(
    base: TierStats,
    high_ref: Optional[ReferenceRecord],
    low_ref: Optional[ReferenceRecord],
    tier: Tier,
    *,
    default_multiplier: Optional[float] = None,
) -> TierStats:
    """Scale *base* by the durability ratio of two observed material records.

    Missing references, or a low reference without durability, fall back to
    :func:`scale_stats` with *default_multiplier*, or the multiplier of
    *tier* when none is given.
    """

    multiplier = reference_multiplier(high_ref, low_ref)
    if multiplier is None:
        LOGGER.debug("Reference stats not available, using %s tier multiplier", tier.display_name)
        return scale_stats(base, tier, multiplier=default_multiplier)
    LOGGER.debug("Using reference stat multiplier %s (%s / %s)", multiplier, high_ref, low_ref)
    return _apply_multiplier(base, multiplier)
