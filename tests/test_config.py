"""Tests for configuration loading and collection specs."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from museum_eda.config import Config
from museum_eda.models import CollectionSpec


def test_dot_notation_get_and_set(config_file: Path) -> None:
    config = Config(config_file)

    assert config.get("logging.level") == "WARNING"
    assert config.get("missing.key", "default") == "default"

    config.set("report.enabled", True)
    config.set("new.nested.key", 3)
    assert config.get("report.enabled") is True
    assert config.get("new.nested.key") == 3


def test_missing_config_file_gives_empty_config(tmp_path: Path, clean_env: None) -> None:
    config = Config(tmp_path / "absent.yaml")
    assert config.to_dict() == {}
    assert config.collection_specs() == []


def test_env_overrides(config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAMPLE_SIZE", "10")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("MUSEUM_EDA_OUTPUT_DIR", "/tmp/museum-out")

    config = Config(config_file)

    assert config.get("loader.sample_size") == 10
    assert config.get("logging.level") == "DEBUG"
    assert config.get("data.summaries_dir") == "/tmp/museum-out"


def test_collection_specs_resolve_paths(config_file: Path, raw_dir: Path) -> None:
    specs = Config(config_file).collection_specs()

    assert [spec.name for spec in specs] == ["Cleveland", "Met", "MoMA Artists", "MoMA Artworks"]
    assert all(isinstance(spec, CollectionSpec) for spec in specs)
    assert specs[0].path == raw_dir / "cleveland.csv"
    assert specs[1].date_end_column == "Object End Date"


def test_end_column_defaults_to_start_column(config_file: Path) -> None:
    artworks = Config(config_file).collection_specs(["MoMA Artworks"])[0]
    assert artworks.date_end_column == "DateAcquired"


def test_collection_specs_filter_keeps_config_order(config_file: Path) -> None:
    specs = Config(config_file).collection_specs(["MoMA Artists", "Cleveland"])
    assert [spec.name for spec in specs] == ["Cleveland", "MoMA Artists"]


def test_unknown_collection_name_raises(config_file: Path) -> None:
    with pytest.raises(ValueError):
        Config(config_file).collection_specs(["Louvre"])


def test_invalid_distribution_spec_is_rejected(tmp_path: Path, clean_env: None) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({
        "collections": [{
            "name": "Met",
            "path": "met.csv",
            "identity_column": "Artist Display Name",
            "distributions": [
                {"name": "years", "kind": "temporal", "column": "Object Begin Date", "bin_width": 0},
            ],
        }],
    }), encoding="utf-8")

    with pytest.raises(ValidationError):
        Config(path).collection_specs()


def test_role_columns_lists_each_column_once(tmp_path: Path) -> None:
    spec = CollectionSpec(
        name="Cleveland",
        path=tmp_path / "c.csv",
        identity_column="artists_tags",
        date_start_column="creation_date_earliest",
        date_end_column="creation_date_latest",
        distributions=[
            {"name": "dept", "column": "department"},
            {"name": "century", "kind": "temporal", "column": "creation_date_earliest"},
        ],
    )
    assert spec.role_columns() == [
        "artists_tags",
        "creation_date_earliest",
        "creation_date_latest",
        "department",
    ]


def test_duplicate_distribution_names_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValidationError):
        CollectionSpec(
            name="Met",
            path=tmp_path / "m.csv",
            identity_column="Artist Display Name",
            distributions=[
                {"name": "dept", "column": "Department"},
                {"name": "dept", "column": "Artist Nationality"},
            ],
        )
