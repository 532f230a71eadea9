"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest
import yaml

from layout_search.config_loader import ConfigLoader, apply_overrides, load_settings
from layout_search.settings import ScoringWeights, Settings


REPO_CONFIG = Path(__file__).resolve().parent.parent / "config.yaml"


def write_config(tmp_path, content):
    path = tmp_path / "config.yaml"
    path.write_text(content)
    return str(path)


def test_defaults_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_settings() == Settings()


def test_repository_config_matches_defaults():
    assert load_settings(str(REPO_CONFIG)) == Settings()


def test_overrides_from_yaml(tmp_path):
    path = write_config(tmp_path, """
algorithm_version: 5.0
scoring:
  single_middle: 7
  pinkie_cells: [[0, 0]]
search:
  workers: 2
output:
  log_file: runs.log
""")
    settings = load_settings(path)

    assert settings.algorithm_version == 5.0
    assert settings.scoring.single_middle == 7
    assert settings.scoring.pinkie_cells == ((0, 0),)
    assert settings.scoring.double_middle_inward == ScoringWeights().double_middle_inward
    assert settings.search.workers == 2
    assert settings.search.stagnation_limit == 1000
    assert settings.output.log_file == "runs.log"


def test_empty_config_file(tmp_path):
    assert load_settings(write_config(tmp_path, "")) == Settings()


def test_unknown_keys_rejected(tmp_path):
    path = write_config(tmp_path, "scoring:\n  singel_middle: 3\nextra: {}\n")
    loader = ConfigLoader(path)

    issues = loader.validate_config()
    assert "Unknown key in 'scoring': singel_middle" in issues
    assert "Unknown section: extra" in issues
    with pytest.raises(ValueError):
        loader.get_settings()


def test_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(str(tmp_path / "missing.yaml"))


def test_malformed_yaml(tmp_path):
    with pytest.raises(yaml.YAMLError):
        load_settings(write_config(tmp_path, "scoring: [unclosed\n"))


def test_apply_overrides_ignores_none():
    settings = Settings()
    assert apply_overrides(settings, 'search', workers=None) is settings

    updated = apply_overrides(settings, 'search', workers=3, stagnation_limit=None)
    assert updated.search.workers == 3
    assert updated.search.stagnation_limit == 1000
    assert settings.search.workers == 9


def test_weight_lookups():
    weights = ScoringWeights()
    assert weights.single_weight(1) == 3
    assert weights.roll_bonus(3, 0, inward=False) == 25
    assert weights.center_penalty(2) == -10
