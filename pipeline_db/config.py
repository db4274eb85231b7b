"""
pipeline_db/config.py

Environment and .ini driven database configuration helpers.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path

from pipeline_db.errors import ConfigError

DEFAULT_DATABASE_NAME = "pipeline"
DEFAULT_DRIVER = "sqlite"


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def package_data_path(*parts: str) -> Path:
    """
    Return a path inside the installed pipeline_db package.
    """

    return Path(__file__).resolve().parent.joinpath(*parts)


@dataclass(frozen=True)
class DatabaseSettings:
    """
    Location of one pipeline database and the files used to build it.

    dbfile:  SQLite database file.
    sqlpath: DDL script executed to create the schema.
    inipath: Directory holding the dictionary .ini resources.
    driver:  SQLAlchemy dialect/driver name used to build the URL.
    """

    name: str
    dbfile: Path
    sqlpath: Path
    inipath: Path
    driver: str = DEFAULT_DRIVER

    @property
    def url(self) -> str:
        return f"{self.driver}:///{self.dbfile}"


def read_ini(path: Path) -> configparser.ConfigParser:
    """
    Parse an .ini file with values taken verbatim (no interpolation).

    Raises ConfigError when the file is missing or cannot be parsed.
    """

    if not path.is_file():
        raise ConfigError(f"Configuration file not found: {path}")

    parser = configparser.ConfigParser(interpolation=None)
    try:
        with path.open(encoding="utf-8") as handle:
            parser.read_file(handle)
    except (configparser.Error, UnicodeDecodeError) as exc:
        raise ConfigError(f"Malformed configuration file {path}: {exc}") from exc
    return parser


def _resolve_path(raw_path: str, *, base_dir: Path) -> Path:
    candidate = Path(raw_path).expanduser()
    if candidate.is_absolute():
        return candidate
    return (base_dir / candidate).resolve()


def _require_option(
    parser: configparser.ConfigParser,
    *,
    section: str,
    option: str,
    inifile: Path,
) -> str:
    value = parser.get(section, option, fallback="").strip()
    if not value:
        raise ConfigError(
            f"Failed to configure database: '{option}' declaration is missing "
            f"from section [{section}] of {inifile}"
        )
    return value


def load_database_settings(
    inifile: str | Path,
    *,
    name: str = DEFAULT_DATABASE_NAME,
    dbfile: str | Path | None = None,
) -> DatabaseSettings:
    """
    Resolve database settings from one section of an .ini file.

    Database file priority:
    1) explicit `dbfile` argument
    2) PIPELINE_DB_FILE environment variable
    3) `dbfile` key of the section

    Relative paths are resolved against the directory of the .ini file.
    """

    load_env_files()

    ini_path = Path(inifile).expanduser().resolve()
    parser = read_ini(ini_path)
    if not parser.has_section(name):
        raise ConfigError(f"Section [{name}] is missing from {ini_path}")

    base_dir = ini_path.parent
    sqlpath = _require_option(parser, section=name, option="sqlpath", inifile=ini_path)
    inipath = _require_option(parser, section=name, option="inipath", inifile=ini_path)

    if dbfile is not None:
        resolved_dbfile = Path(dbfile).expanduser().resolve()
    else:
        env_dbfile = os.getenv("PIPELINE_DB_FILE")
        if env_dbfile and env_dbfile.strip():
            resolved_dbfile = Path(env_dbfile.strip()).expanduser().resolve()
        else:
            raw_dbfile = _require_option(parser, section=name, option="dbfile", inifile=ini_path)
            resolved_dbfile = _resolve_path(raw_dbfile, base_dir=base_dir)

    driver = parser.get(name, "driver", fallback=DEFAULT_DRIVER).strip() or DEFAULT_DRIVER
    if not driver.startswith("sqlite"):
        raise ConfigError(f"Only SQLite drivers are supported, got '{driver}'.")

    return DatabaseSettings(
        name=name,
        dbfile=resolved_dbfile,
        sqlpath=_resolve_path(sqlpath, base_dir=base_dir),
        inipath=_resolve_path(inipath, base_dir=base_dir),
        driver=driver,
    )
