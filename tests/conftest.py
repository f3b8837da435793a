"""Shared fixtures: small museum-shaped datasets written to tmp_path."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml


CLEVELAND_CSV = """id,title,artists_tags,department,creation_date_earliest,creation_date_latest
1,Bowl,Unknown Potter,Chinese Art,1500,1550
2,Portrait,Rembrandt,European Painting,1650,1660
3,Vase,,Chinese Art,,
4,Sketch,Rembrandt,Prints,1640,1642
"""

MET_CSV = """Object ID,Artist Display Name,Department,Object Begin Date,Object End Date,Artist Nationality
10,Vincent van Gogh,European Paintings,1889,1889,Dutch
11,Hokusai,Asian Art,1830,1832,Japanese
12,,Egyptian Art,-1350,-1300,
13,Vincent van Gogh,European Paintings,1887,1888,Dutch
14,Winslow Homer,American Wing,1885,1886,American
"""

MOMA_ARTISTS_CSV = """ConstituentID,DisplayName,Nationality,Gender
1,Robert Arneson,American,Male
2,Doroteo Arnaiz,Spanish,Male
3,Bill Arnold,American,Female
4,Charles Arnoldi,American,
5,Per Arnoldi,Danish,Non-Binary
"""

MOMA_ARTWORKS_CSV = """Title,ConstituentID,Medium,DateAcquired
Ferdinandsbrucke Project,6210,Ink and cut-and-pasted painted pages,1996-04-09
City of Music,7470,Paint and colored pencil on print,1995-01-17
Villa,7605,Graphite,1997-01-15
Villa,7605,Graphite,2001-11-30
Untitled,,Graphite,
"""


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def raw_dir(tmp_path: Path) -> Path:
    raw = tmp_path / "raw"
    write_text(raw / "cleveland.csv", CLEVELAND_CSV)
    write_text(raw / "met.csv", MET_CSV)
    write_text(raw / "artists.csv", MOMA_ARTISTS_CSV)
    write_text(raw / "artworks.csv", MOMA_ARTWORKS_CSV)
    return raw


def collection_entries() -> list[dict]:
    return [
        {
            "name": "Cleveland",
            "path": "cleveland.csv",
            "identity_column": "artists_tags",
            "date_start_column": "creation_date_earliest",
            "date_end_column": "creation_date_latest",
            "distributions": [
                {"name": "department", "kind": "categorical", "column": "department"},
                {"name": "creation_century", "kind": "temporal",
                 "column": "creation_date_earliest", "bin_width": 100},
            ],
        },
        {
            "name": "Met",
            "path": "met.csv",
            "identity_column": "Artist Display Name",
            "date_start_column": "Object Begin Date",
            "date_end_column": "Object End Date",
            "distributions": [
                {"name": "artist_nationality", "kind": "categorical",
                 "column": "Artist Nationality", "top_n": 2},
            ],
        },
        {
            "name": "MoMA Artists",
            "path": "artists.csv",
            "identity_column": "ConstituentID",
            "distributions": [
                {"name": "gender", "kind": "normalized", "column": "Gender"},
            ],
        },
        {
            "name": "MoMA Artworks",
            "path": "artworks.csv",
            "identity_column": "ConstituentID",
            "date_start_column": "DateAcquired",
            "distributions": [
                {"name": "medium", "kind": "categorical", "column": "Medium", "top_n": 2},
                {"name": "acquisition_years", "kind": "temporal",
                 "column": "DateAcquired", "bin_width": 5},
            ],
        },
    ]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("MUSEUM_EDA_DATA_DIR", "MUSEUM_EDA_OUTPUT_DIR", "SAMPLE_SIZE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_file(tmp_path: Path, raw_dir: Path, clean_env: None) -> Path:
    config = {
        "data": {
            "raw_dir": str(raw_dir),
            "summaries_dir": str(tmp_path / "out"),
            "plots_dir": str(tmp_path / "out" / "plots"),
        },
        "loader": {"sample_size": None},
        "summarizer": {"top_n": None},
        "output": {"enabled": True},
        "report": {"enabled": False, "dpi": 50, "figsize": [4, 3]},
        "logging": {"level": "WARNING"},
        "collections": collection_entries(),
    }
    path = tmp_path / "pipeline_config.yaml"
    path.write_text(yaml.safe_dump(config, sort_keys=False), encoding="utf-8")
    return path
