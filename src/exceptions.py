class DataFetchError(RuntimeError):
    def __init__(self, source: str, message: str):  # noqa: D401
        super().__init__(f"[{source}] {message}")
        self.source = source
        self.message = message


class FormatError(DataFetchError):
    """Response body is not wrapped in the expected gviz envelope."""


class DecodeError(DataFetchError):
    """Envelope content is not valid JSON."""


class FetchError(DataFetchError):
    def __init__(self, source: str, status: int, reason: str = ""):
        detail = f"HTTP {status}" + (f" {reason}" if reason else "")
        super().__init__(source, f"request failed: {detail}")
        self.status = status
        self.reason = reason


class AggregateDatasetError(DataFetchError):
    def __init__(self, dataset: str, cause: BaseException):
        super().__init__(dataset, f"dataset fetch failed: {cause}")
        self.dataset = dataset
        self.cause = cause


class OrchestrationError(DataFetchError):
    """A dataset fetch failed or the cache file could not be written."""


__all__ = [
    "AggregateDatasetError",
    "DataFetchError",
    "DecodeError",
    "FetchError",
    "FormatError",
    "OrchestrationError",
]
