"""
Tests unitaires pour la table series.json.
"""

import json
from pathlib import Path

import pytest

from move2jelly.core.exceptions import ConfigError
from move2jelly.services.series_overrides import SeriesOverrideTable


class TestSeriesOverrideTable:
    """Tests pour SeriesOverrideTable."""

    def test_lookup_uses_simplified_titles(self) -> None:
        table = SeriesOverrideTable({"The Office (US)": {"tmdbid": "2316"}})

        assert table.lookup("the office us") == "2316"
        assert table.lookup("The.Office.US") == "2316"
        assert table.lookup("The Office") is None

    def test_entries_without_id_are_ignored(self) -> None:
        table = SeriesOverrideTable({"Doctor Who": {}, "Sherlock": {"tmdbid": 19885}})

        assert len(table) == 1
        assert table.lookup("Sherlock") == "19885"

    def test_missing_file_gives_empty_table(self, tmp_path: Path) -> None:
        table = SeriesOverrideTable.load(tmp_path / "series.json")
        assert len(table) == 0

    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "series.json"
        path.write_text(json.dumps({"Doctor Who": {"tmdbid": "57243"}}), encoding="utf-8")

        assert SeriesOverrideTable.load(path).lookup("Doctor Who") == "57243"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "series.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError):
            SeriesOverrideTable.load(path)

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "series.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ConfigError, match="JSON object"):
            SeriesOverrideTable.load(path)
