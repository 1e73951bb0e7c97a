"""Configuration objects and loading for the scraper."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import soupsieve
import yaml

from .errors import ConfigError

DEFAULT_TIMEOUT = 60.0
DEFAULT_ASSET_HOST = "ctfassets.net"
DEFAULT_KEYWORD = "recette"
DEFAULT_SELECTOR = "div[data-zest] a[href]"

REQUIRED_KEYS = (
    ("scraper", "url"),
    ("webdav", "url"),
    ("webdav", "username"),
    ("webdav", "password"),
    ("webdav", "folder"),
    ("webdav", "folder_format"),
)

ENV_OVERRIDES = {
    "RECIPE_CARDS_SCRAPER_URL": ("scraper", "url"),
    "RECIPE_CARDS_WEBDAV_URL": ("webdav", "url"),
    "RECIPE_CARDS_WEBDAV_USERNAME": ("webdav", "username"),
    "RECIPE_CARDS_WEBDAV_PASSWORD": ("webdav", "password"),
}

_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?")
_DURATION_PATTERN = re.compile(r"(?:\d+(?:\.\d+)?(?:ms|s|m|h))+")
_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


@dataclass(frozen=True)
class ScraperConfig:
    """Settings for one run: the source page and the WebDAV destination."""

    page_url: str
    dav_url: str
    dav_username: str
    dav_password: str
    dav_folder: str
    dav_folder_format: str
    timeout: float = DEFAULT_TIMEOUT
    asset_host: str = DEFAULT_ASSET_HOST
    keyword: str = DEFAULT_KEYWORD
    selector: str = DEFAULT_SELECTOR


def parse_duration(value: Union[int, float, str]) -> float:
    """Convert ``60``, ``"90s"``, ``"2m"`` or ``"1m30s"`` into seconds."""
    if isinstance(value, bool):
        raise ConfigError(f"Invalid timeout: {value!r}")
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        text = str(value).strip()
        if _NUMBER_PATTERN.fullmatch(text):
            seconds = float(text)
        elif _DURATION_PATTERN.fullmatch(text):
            seconds = sum(
                float(number) * _DURATION_UNITS[unit]
                for number, unit in _DURATION_PART.findall(text)
            )
        else:
            raise ConfigError(f"Invalid timeout: {value!r}")
    if seconds <= 0:
        raise ConfigError(f"Timeout must be positive, got {value!r}")
    return seconds


def _lower_keys(section: Any) -> Dict[str, Any]:
    if not isinstance(section, Mapping):
        return {}
    return {str(key).lower(): value for key, value in section.items()}


def _normalize(raw: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Lower-case section and key names; the original files used ``Scrapper``."""
    sections: Dict[str, Dict[str, Any]] = {}
    for name, section in raw.items():
        name = str(name).lower()
        if name == "scrapper":
            name = "scraper"
        keys = _lower_keys(section)
        if "folderformat" in keys:
            keys.setdefault("folder_format", keys.pop("folderformat"))
        sections.setdefault(name, {}).update(keys)
    return sections


def _apply_env_overrides(
    sections: Dict[str, Dict[str, Any]], environ: Mapping[str, str]
) -> Dict[str, Dict[str, Any]]:
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            sections.setdefault(section, {})[key] = value
    return sections


def build_config(
    raw: Mapping[str, Any], environ: Mapping[str, str] | None = None
) -> ScraperConfig:
    """Validate a parsed configuration mapping and freeze it."""
    if not isinstance(raw, Mapping):
        raise ConfigError("Configuration document must be a mapping")
    sections = _apply_env_overrides(
        _normalize(raw), os.environ if environ is None else environ
    )

    for section, key in REQUIRED_KEYS:
        value = sections.get(section, {}).get(key)
        if value is None or str(value).strip() == "":
            raise ConfigError(f"key {section}.{key} is missing from configuration file")

    scraper = sections["scraper"]
    webdav = sections["webdav"]
    timeout = scraper.get("timeout")
    selector = str(scraper.get("selector") or DEFAULT_SELECTOR)
    try:
        soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as exc:
        raise ConfigError(f"Invalid selector {selector!r}: {exc}") from exc
    return ScraperConfig(
        page_url=str(scraper["url"]),
        dav_url=str(webdav["url"]),
        dav_username=str(webdav["username"]),
        dav_password=str(webdav["password"]),
        dav_folder=str(webdav["folder"]),
        dav_folder_format=str(webdav["folder_format"]),
        timeout=DEFAULT_TIMEOUT if timeout is None else parse_duration(timeout),
        asset_host=str(scraper.get("asset_host") or DEFAULT_ASSET_HOST),
        keyword=str(scraper.get("keyword") or DEFAULT_KEYWORD).lower(),
        selector=selector,
    )


def load_config(
    path: Union[str, Path], environ: Mapping[str, str] | None = None
) -> ScraperConfig:
    """Read a YAML configuration document from *path*."""
    config_path = Path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except OSError as exc:
        raise ConfigError(f"open: {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file: {exc}") from exc
    return build_config(raw, environ)
