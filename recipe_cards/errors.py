"""Exceptions raised by the recipe card scraper."""

from __future__ import annotations


class RecipeCardsError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(RecipeCardsError):
    """The configuration document is unreadable, invalid or incomplete."""


class PageFetchError(RecipeCardsError):
    """The source page could not be retrieved."""


class InvalidLinkError(RecipeCardsError):
    """A candidate link cannot be turned into a downloadable URL."""


class DownloadError(RecipeCardsError):
    """An image could not be downloaded from the asset host."""


class StoreError(RecipeCardsError):
    """A WebDAV operation failed."""
