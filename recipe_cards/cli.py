"""Command-line entry point for the recipe card scraper."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import load_config
from .crawler import RecipeCardScraper
from .errors import ConfigError, PageFetchError, StoreError
from .storage import WebDavStore

logger = logging.getLogger("recipe_cards.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="recipe-cards",
        description=(
            "Copy recipe card images from the vendor page to a dated WebDAV folder."
        ),
    )
    parser.add_argument("config", type=Path, help="Path to the YAML configuration file")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1

    store = WebDavStore(config.dav_url, config.dav_username, config.dav_password)
    try:
        store.connect()
    except StoreError as exc:
        logger.error("%s", exc)
        return 1

    scraper = RecipeCardScraper(config, store)
    try:
        result = scraper.run()
    except PageFetchError as exc:
        logger.error("Cannot load source page: %s", exc)
        return 1

    if not result.outcomes:
        logger.error("No recipe card found on %s", config.page_url)
        return 1
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
