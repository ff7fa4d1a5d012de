"""Tests for variant orchestration, configuration and the CLI."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

pytest.importorskip("PIL")
import numpy as np
from PIL import Image

from variant_pipeline import main_variants
from variant_pipeline.core import config
from variant_pipeline.core.utils_color import Pixel
from variant_pipeline.modules.stats import MaterialTables, Tier, TierPalette, TierStats, scale_stats
from variant_pipeline.modules.texture import TonalProfile, adjust_brightness, recolor
from variant_pipeline.modules.variant_generator import Variant, VariantGenerator, VariantRegistry


def _grayscale_sprite() -> Image.Image:
    sprite = Image.new("RGBA", (4, 4), (0, 0, 0, 0))
    sprite.putpixel((0, 0), (255, 255, 255, 255))
    sprite.putpixel((1, 0), (53, 53, 53, 255))
    sprite.putpixel((2, 0), (180, 40, 40, 255))
    return sprite


@pytest.fixture()
def asset_tree(tmp_path: Path) -> Path:
    input_dir = tmp_path / "input"
    (input_dir / "mymod").mkdir(parents=True)
    _grayscale_sprite().save(input_dir / "mymod" / "iron_pickaxe.png")
    _grayscale_sprite().save(input_dir / "gold_pickaxe.png")
    return tmp_path


def _config(root: Path, **overrides: object) -> dict:
    values = {"PATH_INPUT": root / "input", "PATH_OUTPUT": root / "out", "THREADS": 2}
    values.update(overrides)
    return config.build_config(values)


def test_build_config_ignores_unknown_keys() -> None:
    cfg = config.build_config({"THREADS": 3, "NOT_A_KEY": 1})
    assert cfg["THREADS"] == 3
    assert "NOT_A_KEY" not in cfg
    assert cfg["TARGET_TIERS"] == ("MID", "TOP")


@pytest.mark.parametrize(
    "overrides",
    [{"MID_MULTIPLIER": 0.9}, {"MID_MULTIPLIER": 2.0, "TOP_MULTIPLIER": 1.5}, {"THREADS": 0}],
)
def test_validate_config_rejects_bad_values(overrides: dict) -> None:
    with pytest.raises(ValueError):
        config.validate_config(config.build_config(overrides))


def test_generate_variant_pairs_texture_and_stats(asset_tree: Path) -> None:
    generator = VariantGenerator(_config(asset_tree))
    base = TierStats(mining_speed=6.0, durability=250)
    variant = generator.generate_variant("iron_pickaxe", _grayscale_sprite(), Tier.TOP, base)
    assert variant.stats is not None and variant.stats.durability == 375
    assert tuple(variant.grid[0, 0]) == (29, 94, 83, 255)
    assert tuple(variant.grid[0, 1]) == (9, 30, 26, 255)
    assert tuple(variant.grid[0, 2]) == (180, 40, 40, 255)
    assert generator.generate_variant("iron_pickaxe", _grayscale_sprite(), Tier.MID).stats is None


def test_configured_multipliers_and_reference_mode(asset_tree: Path) -> None:
    base = TierStats(durability=250)
    fixed = VariantGenerator(_config(asset_tree, TOP_MULTIPLIER=2.0))
    assert fixed.generate_stats(base, Tier.TOP).durability == 500
    referenced = VariantGenerator(_config(asset_tree, USE_REFERENCE_STATS=True))
    assert referenced.generate_stats(base, Tier.TOP).durability == 4096
    assert referenced.generate_stats(base, Tier.MID).durability == 2031


def test_reference_mode_falls_back_without_records(asset_tree: Path) -> None:
    generator = VariantGenerator(_config(asset_tree, USE_REFERENCE_STATS=True), tables=MaterialTables())
    assert generator.generate_stats(TierStats(durability=250), Tier.TOP).durability == 375
    configured = VariantGenerator(
        _config(asset_tree, USE_REFERENCE_STATS=True, TOP_MULTIPLIER=2.0), tables=MaterialTables()
    )
    fixed = VariantGenerator(_config(asset_tree, TOP_MULTIPLIER=2.0))
    base = TierStats(durability=250)
    assert configured.generate_stats(base, Tier.TOP) == fixed.generate_stats(base, Tier.TOP)
    assert configured.generate_stats(base, Tier.TOP).durability == 500


def test_reference_mode_scales_armor_by_armor_records(asset_tree: Path) -> None:
    generator = VariantGenerator(_config(asset_tree, USE_REFERENCE_STATS=True))
    chestplate = TierStats(durability=240, armor=6, toughness=1.0)
    scaled = generator.generate_stats(chestplate, Tier.TOP)
    assert scaled == scale_stats(chestplate, Tier.TOP, multiplier=592 / 240)
    assert scaled.armor == 15  # ceil(6 * 2.4667)


def test_configured_palette_overrides(asset_tree: Path) -> None:
    palettes = {"Enderite": ("#ffffff", "black")}
    generator = VariantGenerator(_config(asset_tree, PALETTES=palettes))
    grid = generator.generate_texture(_grayscale_sprite(), Tier.TOP)
    assert tuple(grid[0, 0]) == (255, 255, 255, 255)
    assert tuple(grid[0, 1]) == (53, 53, 53, 255)
    assert generator.tables.palette(Tier.MID).bright == Pixel(100, 100, 120, 255)


def test_palette_tonal_profile_is_applied(asset_tree: Path) -> None:
    profile = TonalProfile(brightness=0.5)
    tables = MaterialTables(
        palettes={Tier.TOP: TierPalette(Tier.TOP, Pixel(200, 200, 200), Pixel(0, 0, 0), profile)}
    )
    generator = VariantGenerator(_config(asset_tree), tables=tables)
    sprite = _grayscale_sprite()
    expected = adjust_brightness(recolor(sprite, Pixel(200, 200, 200), Pixel(0, 0, 0)), 0.5, 1.0)
    np.testing.assert_array_equal(generator.generate_texture(sprite, Tier.TOP), expected)


def test_registry_lookups() -> None:
    registry = VariantRegistry()
    grid = np.zeros((1, 1, 4), dtype=np.uint8)
    registry.register(Variant("iron_sword", "mymod", Tier.MID, grid))
    registry.register(Variant("iron_sword", "mymod", Tier.TOP, grid))
    registry.register(Variant("iron_axe", "other", Tier.TOP, grid))
    assert len(registry) == 3
    assert registry.get("mymod", "iron_sword", Tier.TOP) is not None
    assert registry.get("mymod", "iron_axe", Tier.TOP) is None
    assert len(registry.for_tier(Tier.TOP)) == 2
    assert len(registry.for_source("mymod")) == 2
    registry.clear()
    assert len(registry) == 0


def test_run_writes_variants(asset_tree: Path) -> None:
    stats_file = asset_tree / "stats.json"
    stats_file.write_text(json.dumps({"iron_pickaxe": {"durability": 250, "mining_speed": 6.0}}), encoding="utf-8")
    generator = VariantGenerator(_config(asset_tree, STATS_FILE=stats_file))
    variants = generator.run(threads=2)

    assert len(variants) == 2
    assert len(generator.registry) == 2
    out_dir = asset_tree / "out" / "mymod"
    netherite = out_dir / "netherite_pickaxe.png"
    enderite = out_dir / "enderite_pickaxe.png"
    assert netherite.exists() and enderite.exists()
    assert not (asset_tree / "out" / "gold_pickaxe.png").exists()

    with Image.open(enderite) as img:
        assert img.convert("RGBA").getpixel((0, 0)) == (29, 94, 83, 255)
        assert img.convert("RGBA").getpixel((3, 3)) == (0, 0, 0, 0)
    top = generator.registry.get("mymod", "iron_pickaxe", Tier.TOP)
    assert top is not None
    assert top.output_path == enderite
    assert top.stats is not None and top.stats.durability == 375


def test_run_without_inputs_returns_nothing(tmp_path: Path) -> None:
    (tmp_path / "input").mkdir()
    generator = VariantGenerator(_config(tmp_path))
    assert generator.run() == []
    assert VariantGenerator(_config(tmp_path / "missing")).run() == []


def test_cli_rejects_invalid_multipliers(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main_variants.main(["--input", str(tmp_path), "--mid-multiplier", "0.5"])


def test_cli_runs_pipeline(asset_tree: Path) -> None:
    main_variants.main(
        [
            "--input",
            str(asset_tree / "input"),
            "--output",
            str(asset_tree / "cli_out"),
            "--threads",
            "1",
            "--tiers",
            "Enderite",
            "--log-file",
            str(asset_tree / "logs" / "run.log"),
        ]
    )
    assert (asset_tree / "cli_out" / "mymod" / "enderite_pickaxe.png").exists()
    assert not (asset_tree / "cli_out" / "mymod" / "netherite_pickaxe.png").exists()


def test_cli_palette_override(asset_tree: Path) -> None:
    main_variants.main(
        [
            "--input",
            str(asset_tree / "input"),
            "--output",
            str(asset_tree / "cli_out"),
            "--tiers",
            "TOP",
            "--palette",
            "TOP",
            "#ff0000",
            "#000000",
            "--log-file",
            str(asset_tree / "logs" / "run.log"),
        ]
    )
    with Image.open(asset_tree / "cli_out" / "mymod" / "enderite_pickaxe.png") as img:
        assert img.convert("RGBA").getpixel((0, 0)) == (255, 0, 0, 255)


def test_cli_rejects_unknown_palette_color(asset_tree: Path) -> None:
    with pytest.raises(SystemExit):
        main_variants.main(
            [
                "--input",
                str(asset_tree / "input"),
                "--palette",
                "TOP",
                "not-a-color",
                "black",
                "--log-file",
                str(asset_tree / "logs" / "run.log"),
            ]
        )
