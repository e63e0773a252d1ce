"""Service configuration read from the environment and a dotenv file."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

_log = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded or a value is invalid."""


def _parse_int(value: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise ConfigError(f"parsing {value!r}: invalid syntax")
    number = int(value)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ConfigError(f"parsing {value!r}: value out of range")
    return number


@dataclass(frozen=True)
class DBConfig:
    """Location of the SQLite database."""

    path: str = ""

    @classmethod
    def from_env(cls) -> DBConfig:
        return cls(path=os.environ.get("DB_PATH", ""))

    def dsn(self) -> str:
        return self.path


@dataclass(frozen=True)
class FileSystemConfig:
    """Directory where stored files live."""

    storage_path: str = ""

    @classmethod
    def from_env(cls) -> FileSystemConfig:
        return cls(storage_path=os.environ.get("BOOKS_FILE_DIR", ""))


@dataclass(frozen=True)
class GRPCServerConfig:
    """Where the gRPC server listens."""

    host: str = ""
    port: str = ""
    network: str = ""

    @classmethod
    def from_env(cls) -> GRPCServerConfig:
        return cls(
            host=os.environ.get("GRPC_HOST", ""),
            port=os.environ.get("GRPC_PORT", ""),
            network=os.environ.get("GRPC_NETWORK", ""),
        )

    def addr(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class HttpConfig:
    """Where the HTTP server listens."""

    host: str = ""
    port: str = ""

    @classmethod
    def from_env(cls) -> HttpConfig:
        return cls(
            host=os.environ.get("HTTP_HOST", ""),
            port=os.environ.get("HTTP_PORT", ""),
        )

    def addr(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class HandlersConfig:
    """Settings for HTTP handlers: URLs, pagination, content types and formats."""

    books_url: str = ""
    statics_url: str = ""
    templates_url: str = ""
    not_found_url: str = ""

    raw_page_number: str = ""
    raw_books_limit: str = ""

    json: str = ""
    pdf: str = ""
    html: str = ""

    format_json: str = ""
    format_pdf: str = ""
    format_html: str = ""

    raw_http_body_size: str = ""

    def default_books_page_number(self) -> int:
        return _parse_int(self.raw_page_number)

    def default_books_limit(self) -> int:
        return _parse_int(self.raw_books_limit)

    def http_body_size(self) -> int:
        return _parse_int(self.raw_http_body_size)


@dataclass(frozen=True)
class Config:
    """Everything the service needs to start."""

    db: DBConfig
    grpc_server: GRPCServerConfig


def must_load(filename: str = ".env") -> None:
    """Load variables from a dotenv file without replacing ones already set."""
    path = Path(filename)
    try:
        path.stat()
    except FileNotFoundError:
        raise ConfigError(f"file {filename} does not exist") from None
    except OSError as err:
        raise ConfigError(str(err)) from err

    try:
        values = dotenv_values(path)
    except (OSError, UnicodeDecodeError) as err:
        raise ConfigError(f"Incorrect data in the configuration file: {err}") from err

    for key, value in values.items():
        if value is not None:
            os.environ.setdefault(key, value)

    _log.info("the configuration file '%s' has been uploaded successfully", filename)


def load_config(filename: str = ".env") -> Config:
    """Load the dotenv file and build the service configuration from the environment."""
    must_load(filename)
    return Config(db=DBConfig.from_env(), grpc_server=GRPCServerConfig.from_env())