"""Entry point for the catalog cache dashboard."""

from __future__ import annotations

import logging

from catalog.config import Settings, load_settings


def _setup_logging(settings: Settings) -> None:
    # The dashboard owns the terminal, so logs go to a file.
    logging.basicConfig(
        filename=settings.log_file,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    from catalog.ui.app import CatalogApp

    settings = load_settings()
    _setup_logging(settings)
    app = CatalogApp(settings)
    app.run()


if __name__ == "__main__":
    main()
