"""HTML extraction of recipe card links."""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup

from .config import DEFAULT_ASSET_HOST, DEFAULT_KEYWORD, DEFAULT_SELECTOR


def extract_recipe_links(
    html: str,
    *,
    asset_host: str = DEFAULT_ASSET_HOST,
    keyword: str = DEFAULT_KEYWORD,
    selector: str = DEFAULT_SELECTOR,
) -> List[str]:
    """Return recipe card targets found in *html*, in document order.

    Only anchors matched by *selector* are considered, which scopes the search
    to the recipe card region. A target is kept when it contains *asset_host*
    and the anchor text, lower-cased, contains *keyword*. Duplicates are kept.
    """
    soup = BeautifulSoup(html, "html.parser")
    keyword = keyword.lower()

    links: List[str] = []
    for anchor in soup.select(selector):
        href = anchor.get("href")
        if not href or asset_host not in href:
            continue
        if keyword not in anchor.get_text().lower():
            continue
        links.append(href)
    return links
