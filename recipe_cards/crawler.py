"""High-level orchestration: scrape the page, then transfer each recipe card."""

from __future__ import annotations

import logging
import posixpath
import time
from datetime import datetime
from typing import Callable, List, Optional

import requests

from .config import ScraperConfig
from .content import extract_recipe_links
from .errors import DownloadError, InvalidLinkError, PageFetchError, StoreError
from .images import download_image
from .models import LinkOutcome, RunResult, TransferStatus
from .storage import WebDavStore
from .utils import dated_folder, normalize_link

logger = logging.getLogger("recipe_cards")

USER_AGENT = "recipe-cards/0.1"


def create_session() -> requests.Session:
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    return session


def fetch_page(session: requests.Session, url: str, timeout: float) -> str:
    """GET the source page and return its decoded body."""
    logger.info("Loading %s", url)
    try:
        resp = session.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise PageFetchError(f"GET {url}: {exc}") from exc
    try:
        if not 200 <= resp.status_code < 300:
            raise PageFetchError(f"GET {url}: wrong status code {resp.status_code}")
        return resp.text
    finally:
        resp.close()


class RecipeCardScraper:
    """Copies recipe card images from the vendor page to a dated WebDAV folder."""

    def __init__(
        self,
        config: ScraperConfig,
        store: WebDavStore,
        session: Optional[requests.Session] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.config = config
        self.store = store
        self.session = session or create_session()
        self.clock = clock

    def scrape(self) -> List[str]:
        """Return every candidate link on the configured page."""
        html = fetch_page(self.session, self.config.page_url, self.config.timeout)
        links = extract_recipe_links(
            html,
            asset_host=self.config.asset_host,
            keyword=self.config.keyword,
            selector=self.config.selector,
        )
        logger.info("Found %d recipe card link(s)", len(links))
        return links

    def transfer(self, link: str) -> LinkOutcome:
        """Run one candidate link through normalize, check, download and upload."""
        try:
            image = normalize_link(link)
        except InvalidLinkError as exc:
            logger.error("Cannot parse URL '%s': %s", link, exc)
            return LinkOutcome(link=link, status=TransferStatus.FAILED, error=str(exc))

        # Evaluated per link, a run crossing midnight uses two folders.
        folder = dated_folder(
            self.config.dav_folder, self.config.dav_folder_format, self.clock()
        )
        remote_path = posixpath.join(folder, image.filename)
        outcome = LinkOutcome(
            link=link,
            status=TransferStatus.FAILED,
            filename=image.filename,
            remote_path=remote_path,
        )

        try:
            self.store.ensure_directory(folder)
            if self.store.exists(remote_path):
                logger.info("File %s already downloaded!", image.filename)
                outcome.status = TransferStatus.SKIPPED
                return outcome

            data = download_image(self.session, image.url, self.config.timeout)
            self.store.write(remote_path, data)
        except (DownloadError, StoreError) as exc:
            logger.error("Cannot download file '%s': %s", image.filename, exc)
            outcome.error = str(exc)
            return outcome

        logger.info("Downloaded %s (%d bytes)", image.filename, len(data))
        outcome.status = TransferStatus.UPLOADED
        return outcome

    def run(self) -> RunResult:
        """Scrape once and transfer every link sequentially.

        Raises :class:`PageFetchError` when the page itself cannot be loaded.
        """
        start = time.perf_counter()
        result = RunResult()
        for link in self.scrape():
            result.add(self.transfer(link))

        logger.info(
            "Finished in %.2fs (%d uploaded, %d skipped, %d failed)",
            time.perf_counter() - start,
            result.uploaded,
            result.skipped,
            result.failed,
        )
        return result
