"""``python -m filterplay``: serve the filter endpoints with Flask's server."""

from __future__ import annotations

from .app import APP_VERSION, app
from .config import SETTINGS, configure_logging


def main() -> None:
    logger = configure_logging()
    logger.info(
        "FilterPlay %s on port %d (dither=%s, source=%s)",
        APP_VERSION,
        SETTINGS.port,
        SETTINGS.dither_method,
        SETTINGS.source_url or SETTINGS.sample_dir,
    )
    app.run(host="0.0.0.0", port=SETTINGS.port, debug=False)


if __name__ == "__main__":
    main()
