"""Infrastructure helpers for sources, caching and responses."""

from .cache import CACHE, ResponseCache, last_good_png, remember_last_good
from .network import FETCHER, SourceFetcher
from .responses import encode_png, send_png, send_png_bytes
from .samples import list_samples, pick_sample

__all__ = [
    "CACHE",
    "ResponseCache",
    "last_good_png",
    "remember_last_good",
    "FETCHER",
    "SourceFetcher",
    "encode_png",
    "send_png",
    "send_png_bytes",
    "list_samples",
    "pick_sample",
]
