"""Tier and statistic records for generated item variants."""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Dict, Mapping

DEFAULT_ATTACK_SPEED = -2.4


class Tier(Enum):
    """Ordered material tiers and their default stat multipliers."""

    BASE = (1.0, "Iron")
    MID = (1.25, "Netherite")
    TOP = (1.5, "Enderite")

    def __init__(self, multiplier: float, display_name: str) -> None:
        self.multiplier = multiplier
        self.display_name = display_name

    @property
    def rank(self) -> int:
        return list(Tier).index(self)

    def __lt__(self, other: "Tier") -> bool:
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def from_name(cls, name: str) -> "Tier":
        """Resolve a tier from its enum name or display name, ignoring case."""

        normalized = name.strip().lower()
        for tier in cls:
            if normalized in (tier.name.lower(), tier.display_name.lower()):
                return tier
        raise ValueError(f"Unknown tier: {name!r}")


@dataclass
class TierStats:
    """Numeric statistics of a tool, weapon or armor piece.

    Zero means the stat does not apply to the item. ``attack_speed`` and
    ``knockback_resistance`` are carried through scaling untouched.
    """

    mining_speed: float = 0.0
    attack_damage: float = 0.0
    attack_speed: float = DEFAULT_ATTACK_SPEED
    durability: int = 0
    armor: int = 0
    toughness: float = 0.0
    knockback_resistance: float = 0.0
    enchantability: int = 0

    def copy(self) -> "TierStats":
        return replace(self)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "TierStats":
        """Build stats from a mapping, ignoring unknown keys."""

        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, object] = {}
        for key, value in values.items():
            if key not in known:
                continue
            kwargs[key] = int(value) if key in ("durability", "armor", "enchantability") else float(value)  # type: ignore[arg-type]
        return cls(**kwargs)  # type: ignore[arg-type]


@dataclass(frozen=True)
class ToolStats:
    """Observed tool material record used as a scaling reference."""

    name: str
    durability: int
    mining_speed: float
    attack_damage: float
    enchantability: int

    def __str__(self) -> str:
        return (
            f"ToolStats{{name={self.name}, durability={self.durability}, "
            f"speed={self.mining_speed:.1f}, damage={self.attack_damage:.1f}}}"
        )


@dataclass(frozen=True)
class ArmorMaterialStats:
    """Observed armor material record used as a scaling reference for armor pieces."""

    name: str
    durability: int
    enchantability: int
    toughness: float
    knockback_resistance: float

    def __str__(self) -> str:
        return f"ArmorMaterialStats{{name={self.name}, durability={self.durability}, toughness={self.toughness:.1f}}}"
