import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    source_url: str
    sample_dir: str
    port: int
    timeout: float
    retries: int
    cache_ttl: float
    dither_method: str
    border_inset: float
    border_radius: float
    thumbnail_ratio: float
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            source_url=os.getenv("SOURCE_URL", ""),
            sample_dir=os.getenv("SAMPLE_DIR", "samples"),
            port=int(os.getenv("PORT", "5600")),
            timeout=float(os.getenv("SOURCE_TIMEOUT", "10.0")),
            retries=int(os.getenv("SOURCE_RETRIES", "2")),
            cache_ttl=float(os.getenv("CACHE_TTL", "5")),
            dither_method=os.getenv("DITHER_METHOD", "jarvis_judice_ninke").lower(),
            border_inset=float(os.getenv("BORDER_INSET", "15")),
            border_radius=float(os.getenv("BORDER_RADIUS", "5")),
            thumbnail_ratio=float(os.getenv("THUMBNAIL_RATIO", "2.0")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


SETTINGS = Settings.from_env()


def configure_logging() -> logging.Logger:
    logging.basicConfig(level=SETTINGS.log_level)
    return logging.getLogger("filterplay")
