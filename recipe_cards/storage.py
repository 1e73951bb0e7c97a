"""WebDAV destination for downloaded recipe cards."""

from __future__ import annotations

import logging
from typing import Any, Optional

from webdav3.client import Client
from webdav3.exceptions import WebDavException

from .errors import StoreError
from .utils import split_remote_path

logger = logging.getLogger("recipe_cards")


class WebDavStore:
    """Session-oriented wrapper over a WebDAV server.

    Every library error is re-raised as :class:`StoreError` so the
    orchestrator only has to deal with one exception type.
    """

    def __init__(
        self,
        url: str,
        username: str,
        password: str,
        *,
        client: Optional[Any] = None,
    ) -> None:
        self.url = url
        self._client = client or Client(
            {
                "webdav_hostname": url,
                "webdav_login": username,
                "webdav_password": password,
            }
        )

    def connect(self) -> None:
        """Check the endpoint and the credentials with a PROPFIND on the root."""
        try:
            self._client.list()
        except WebDavException as exc:
            raise StoreError(f"cannot connect to {self.url}: {exc}") from exc
        logger.debug("Connected to WebDAV server %s", self.url)

    def exists(self, path: str) -> bool:
        try:
            return bool(self._client.check(path))
        except WebDavException as exc:
            raise StoreError(f"stat {path}: {exc}") from exc

    def ensure_directory(self, path: str) -> None:
        """Create *path* and any missing parent; existing folders are left alone."""
        for prefix in split_remote_path(path):
            try:
                if self._client.check(prefix):
                    continue
                logger.debug("Creating folder %s", prefix)
                created = self._client.mkdir(prefix)
            except WebDavException as exc:
                raise StoreError(f"mkdir {prefix}: {exc}") from exc
            if created is False:
                raise StoreError(f"mkdir {prefix}: server refused to create folder")

    def write(self, path: str, data: bytes) -> None:
        """Upload *data* to *path* as a single buffered PUT."""
        try:
            self._client.upload_to(data, path)
        except WebDavException as exc:
            raise StoreError(f"write {path}: {exc}") from exc
