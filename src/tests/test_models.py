"""Tests for tab references, dataset configuration and cache schemas."""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from config import LOCATIONS_CONFIG, SECTORS_CONFIG, get_settings
from models import DATASET_SLOTS, CacheDocument, Dataset, DatasetConfig, Table, TabRef, TabState
from models.schemas import iso_timestamp


class TestTabRef:
    def test_sentinel_gid_is_placeholder(self):
        tab = TabRef.from_gid("0")
        assert tab.state is TabState.PLACEHOLDER
        assert tab.is_placeholder
        assert tab.gid is None

    def test_other_gids_are_active(self):
        tab = TabRef.from_gid(" 1304110900 ")
        assert tab.state is TabState.ACTIVE
        assert tab.gid == "1304110900"
        assert str(tab) == "gid=1304110900"

    def test_active_requires_gid(self):
        with pytest.raises(ValueError):
            TabRef.active("")


class TestDatasetConfig:
    def test_items_follow_slot_order(self):
        assert [slot for slot, _ in LOCATIONS_CONFIG.items()] == list(DATASET_SLOTS)

    def test_placeholders_in_shipped_configs(self):
        for config in (LOCATIONS_CONFIG, SECTORS_CONFIG):
            states = {slot: tab.is_placeholder for slot, tab in config.items()}
            assert states == {
                "overview": False,
                "yearly": True,
                "quarterly": True,
                "regional": True,
                "evTimeseries": False,
                "vcTimeseries": False,
                "deepTechShare": False,
            }
        assert SECTORS_CONFIG.overview == TabRef.active("1065279143")

    def test_missing_slot_rejected(self):
        with pytest.raises(ValueError, match="deepTechShare"):
            DatasetConfig.from_gids({slot: "1" for slot in DATASET_SLOTS[:-1]})


class TestSchemas:
    def test_cells_are_not_coerced(self):
        table = Table(headers=["A"], rows=[["1", 1, 1.0, True, None, ""]])
        assert table.rows[0] == ["1", 1, 1.0, True, None, ""]
        assert [type(v) for v in table.rows[0]] == [str, int, float, bool, type(None), str]

    def test_non_scalar_cells_rejected(self):
        with pytest.raises(ValidationError):
            Table(headers=["A"], rows=[[{"v": 1}]])

    def test_dataset_serializes_with_slot_names(self):
        dataset = Dataset.from_slots({slot: Table.empty() for slot in DATASET_SLOTS})
        assert list(dataset.model_dump(by_alias=True)) == list(DATASET_SLOTS)
        assert dataset.slot("vcTimeseries") is dataset.vc_timeseries

    def test_capture_uses_one_instant(self):
        dataset = Dataset.from_slots({slot: Table.empty() for slot in DATASET_SLOTS})
        moment = datetime(2026, 10, 18, 11, 30, 0, 999999, tzinfo=timezone(timedelta(hours=2)))

        doc = CacheDocument.capture(dataset, dataset, moment)

        assert doc.timestamp == doc.last_updated == "2026-10-18T09:30:00.999Z"
        data = json.loads(doc.to_json())
        assert data["lastUpdated"] == data["timestamp"]

    def test_iso_timestamp_is_utc_z(self):
        assert iso_timestamp(datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)) == "2026-01-02T03:04:05.000Z"


class TestSettings:
    def test_defaults(self, monkeypatch, tmp_path):
        for var in ("SHEETS_CACHE_SPREADSHEET_ID", "SHEETS_CACHE_DIR", "SHEETS_CACHE_FILE", "SHEETS_CACHE_HTTP_TIMEOUT"):
            monkeypatch.delenv(var, raising=False)
        monkeypatch.chdir(tmp_path)

        settings = get_settings()

        assert settings.spreadsheet_id == "1peZPgji4R4-KO4EuuvHGJRWTfHZmuBc9WPVRmn_ldrw"
        assert settings.cache_path == tmp_path / "public" / "cached-data" / "sectors-cache.json"
        assert settings.http_timeout is None

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SHEETS_CACHE_SPREADSHEET_ID", "other")
        monkeypatch.setenv("SHEETS_CACHE_DIR", "/tmp/cache")
        monkeypatch.setenv("SHEETS_CACHE_FILE", "x.json")
        monkeypatch.setenv("SHEETS_CACHE_HTTP_TIMEOUT", "2.5")

        settings = get_settings()

        assert settings.spreadsheet_id == "other"
        assert settings.cache_path == Path("/tmp/cache/x.json")
        assert settings.http_timeout == 2.5

    def test_bad_timeout(self, monkeypatch):
        monkeypatch.setenv("SHEETS_CACHE_HTTP_TIMEOUT", "soon")
        with pytest.raises(ValueError, match="SHEETS_CACHE_HTTP_TIMEOUT"):
            get_settings()
