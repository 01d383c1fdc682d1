# re-export common schemas for simpler imports
from .URLCreateRequest import URLCreateRequest
from .URLInfoResponse import URLCreateResponse, URLStats, URLStatsResponse

__all__ = [
    "URLCreateRequest",
    "URLCreateResponse",
    "URLStats",
    "URLStatsResponse",
]
