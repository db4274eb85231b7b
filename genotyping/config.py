"""
genotyping/config.py

Application-level configuration helpers for assay result handling.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from pipeline_db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items if items else default


@dataclass(frozen=True)
class AssaySettings:
    """
    Runtime settings for assay result parsing and queries.

    platform names the metadata key `<platform>_plex` holding the SNP set.
    """

    platform: str = "fluidigm"
    control_names: tuple[str, ...] = ("NTC",)
    encoding: str = "utf-8-sig"

    @property
    def plex_key(self) -> str:
        return f"{self.platform}_plex"

    @property
    def normalized_control_names(self) -> frozenset[str]:
        return frozenset(name.upper() for name in self.control_names)


@lru_cache(maxsize=1)
def get_assay_settings() -> AssaySettings:
    """
    Return cached assay settings from environment variables.
    """

    return AssaySettings(
        platform=_get_str_env("ASSAY_PLATFORM", "fluidigm").lower(),
        control_names=_get_list_env("ASSAY_CONTROL_NAMES", ("NTC",)),
        encoding=_get_str_env("ASSAY_ENCODING", "utf-8-sig"),
    )
