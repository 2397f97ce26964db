"""Tests for concurrent dataset collection."""

import asyncio

import pytest

from adapters.gviz import GvizAdapter
from collectors import DatasetCollector, fetch_dataset
from concurrency import gather_first_failure
from exceptions import AggregateDatasetError, FetchError
from models.schemas import DATASET_SLOTS, Dataset, Table
from models.tabs import DatasetConfig

from gviz_samples import FakeSheets

GIDS = {
    "overview": "101",
    "yearly": "0",
    "quarterly": "0",
    "regional": "0",
    "evTimeseries": "105",
    "vcTimeseries": "106",
    "deepTechShare": "107",
}

ALL_ACTIVE = {slot: str(200 + i) for i, slot in enumerate(DATASET_SLOTS)}


def tabs_for(gids):
    return {gid: ([slot], [[slot, i]]) for i, (slot, gid) in enumerate(gids.items()) if gid != "0"}


class TestFetchDataset:
    def test_all_slots_populated(self):
        # later slots answer first
        delays = {gid: 0.001 * (10 - i) for i, gid in enumerate(GIDS.values())}
        http = FakeSheets(tabs_for(GIDS), delays=delays)
        adapter = GvizAdapter("sheet", http=http)

        dataset = asyncio.run(fetch_dataset(adapter, DatasetConfig.from_gids(GIDS), "locations"))

        assert isinstance(dataset, Dataset)
        dumped = dataset.model_dump(by_alias=True)
        assert list(dumped) == list(DATASET_SLOTS)
        assert dataset.overview.headers == ["overview"]
        assert dataset.ev_timeseries.rows == [["evTimeseries", 4]]
        assert dataset.deep_tech_share.rows == [["deepTechShare", 6]]
        for slot in ("yearly", "quarterly", "regional"):
            assert dataset.slot(slot) == Table.empty()
        assert len(http.calls) == 4

    def test_one_failing_tab_fails_dataset(self):
        http = FakeSheets(tabs_for(ALL_ACTIVE), statuses={ALL_ACTIVE["vcTimeseries"]: 500})
        collector = DatasetCollector(GvizAdapter("sheet", http=http), DatasetConfig.from_gids(ALL_ACTIVE), "sectors")

        with pytest.raises(AggregateDatasetError) as exc:
            asyncio.run(collector.collect())

        assert exc.value.dataset == "sectors"
        assert "sectors" in str(exc.value)
        assert isinstance(exc.value.cause, FetchError)
        assert exc.value.cause.source == "sectors/vcTimeseries"
        assert exc.value.__cause__ is exc.value.cause

    def test_unfinished_tabs_are_detached_not_cancelled(self):
        slow = ALL_ACTIVE["overview"]
        failing = ALL_ACTIVE["regional"]
        http = FakeSheets(tabs_for(ALL_ACTIVE), statuses={failing: 404}, delays={slow: 0.05})
        collector = DatasetCollector(GvizAdapter("sheet", http=http), DatasetConfig.from_gids(ALL_ACTIVE), "locations")

        async def scenario():
            with pytest.raises(AggregateDatasetError):
                await collector.collect()
            assert slow not in http.completed
            await asyncio.sleep(0.1)

        asyncio.run(scenario())

        assert slow in http.completed
        assert http.cancelled == []


def test_gather_first_failure_keeps_argument_order():
    async def value(v, delay):
        await asyncio.sleep(delay)
        return v

    results = asyncio.run(gather_first_failure(value("a", 0.02), value("b", 0), value("c", 0.01)))
    assert results == ["a", "b", "c"]


def test_gather_first_failure_ignores_later_failures():
    async def fail(msg, delay):
        await asyncio.sleep(delay)
        raise RuntimeError(msg)

    async def scenario():
        with pytest.raises(RuntimeError, match="first"):
            await gather_first_failure(fail("first", 0), fail("second", 0.01))
        await asyncio.sleep(0.02)

    asyncio.run(scenario())
