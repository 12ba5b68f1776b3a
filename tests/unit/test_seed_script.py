"""Unit tests for the categorization seed script."""

import argparse
import importlib.util
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).parents[2] / "scripts" / "seed_categorization.py"


@pytest.fixture(scope="module")
def seed_script():
    spec = importlib.util.spec_from_file_location("seed_categorization", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_parse_category(seed_script):
    assert seed_script.parse_category("Food and Beverage=1") == ("Food and Beverage", 1)
    assert seed_script.parse_category("Health & Fitness = 5") == ("Health & Fitness", 5)


@pytest.mark.parametrize("value", ["Food", "=1", "Food=abc"])
def test_parse_category_rejects_bad_input(seed_script, value):
    with pytest.raises(argparse.ArgumentTypeError):
        seed_script.parse_category(value)


def test_dry_run_prints_summary(seed_script, capsys):
    assert seed_script.main(["--dry-run", "--region", "VN"]) == 0

    out = capsys.readouterr().out
    assert "DRY RUN MODE" in out
    assert "merchant rules (region VN)" in out
    assert "Sample keywords:" in out


def test_no_known_category_exits_with_error(seed_script, capsys):
    assert seed_script.main(["--category", "Travel=9"]) == 1

    out = capsys.readouterr().out
    assert "no seed data for categories: Travel" in out
    assert "Known categories:" in out
