"""Copy recipe card images from a recipe-box vendor page to WebDAV."""

from .config import ScraperConfig, load_config
from .content import extract_recipe_links
from .crawler import RecipeCardScraper, fetch_page
from .models import LinkOutcome, RecipeImage, RunResult, TransferStatus
from .storage import WebDavStore

__all__ = [
    "LinkOutcome",
    "RecipeCardScraper",
    "RecipeImage",
    "RunResult",
    "ScraperConfig",
    "TransferStatus",
    "WebDavStore",
    "extract_recipe_links",
    "fetch_page",
    "load_config",
]
