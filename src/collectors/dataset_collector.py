"""Dataset collector: fetches the seven tabs of one dataset concurrently.

A dataset is all-or-nothing. The first tab that fails fails the whole dataset;
tabs still in flight at that point are left to finish on their own and their
outcome is ignored.
"""

import logging

from adapters.gviz import GvizAdapter
from concurrency import gather_first_failure
from exceptions import AggregateDatasetError
from models.schemas import Dataset
from models.tabs import DatasetConfig

logger = logging.getLogger(__name__)


class DatasetCollector:
    """Collect one named dataset through a shared gviz adapter.

    Attributes:
        adapter: Adapter used for every tab request
        config: Tab assignments for the seven dataset slots
        name: Dataset name, used as the prefix of every tab name in logs
    """

    def __init__(self, adapter: GvizAdapter, config: DatasetConfig, name: str):
        self.adapter = adapter
        self.config = config
        self.name = name

    async def collect(self) -> Dataset:
        """Fetch all seven tabs and assemble them into a :class:`Dataset`.

        Raises:
            AggregateDatasetError: if any tab fetch fails
        """
        logger.info(f"📊 Fetching {self.name} dataset...")
        slots = [slot for slot, _ in self.config.items()]
        try:
            tables = await gather_first_failure(*(
                self.adapter.fetch_tab(tab, f"{self.name}/{slot}")
                for slot, tab in self.config.items()
            ))
        except Exception as e:
            logger.error(f"❌ Failed to fetch {self.name}: {e}", extra={"dataset": self.name})
            raise AggregateDatasetError(self.name, e) from e

        return Dataset.from_slots(dict(zip(slots, tables)))


async def fetch_dataset(adapter: GvizAdapter, config: DatasetConfig, name: str) -> Dataset:
    return await DatasetCollector(adapter, config, name).collect()


__all__ = ["DatasetCollector", "fetch_dataset"]
