import os
from dataclasses import dataclass
from pathlib import Path

from models.tabs import DatasetConfig

DEFAULT_SPREADSHEET_ID = "1peZPgji4R4-KO4EuuvHGJRWTfHZmuBc9WPVRmn_ldrw"
DEFAULT_CACHE_FILE = "sectors-cache.json"

# Same spreadsheet for both datasets, different tabs. gid "0" marks a tab that
# is not wired up yet.
LOCATIONS_CONFIG = DatasetConfig.from_gids({
    "overview": "1304110900",
    "yearly": "0",
    "quarterly": "0",
    "regional": "0",
    "evTimeseries": "1009631018",
    "vcTimeseries": "1452246798",
    "deepTechShare": "2142869021",
})

SECTORS_CONFIG = DatasetConfig.from_gids({
    "overview": "1065279143",
    "yearly": "0",
    "quarterly": "0",
    "regional": "0",
    "evTimeseries": "1754921105",
    "vcTimeseries": "879771746",
    "deepTechShare": "1539405594",
})


@dataclass
class _Settings:
    spreadsheet_id: str = DEFAULT_SPREADSHEET_ID
    cache_dir: Path = Path("public") / "cached-data"
    cache_file: str = DEFAULT_CACHE_FILE
    http_timeout: float | None = None

    @property
    def cache_path(self) -> Path:
        return self.cache_dir / self.cache_file


def _float_or_none(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"SHEETS_CACHE_HTTP_TIMEOUT must be a number, got {value!r}") from None


def get_settings() -> _Settings:
    cache_dir = os.getenv("SHEETS_CACHE_DIR")
    return _Settings(
        spreadsheet_id=os.getenv("SHEETS_CACHE_SPREADSHEET_ID") or DEFAULT_SPREADSHEET_ID,
        cache_dir=Path(cache_dir) if cache_dir else Path.cwd() / "public" / "cached-data",
        cache_file=os.getenv("SHEETS_CACHE_FILE") or DEFAULT_CACHE_FILE,
        http_timeout=_float_or_none(os.getenv("SHEETS_CACHE_HTTP_TIMEOUT")),
    )


__all__ = ["get_settings", "_Settings", "LOCATIONS_CONFIG", "SECTORS_CONFIG"]
