"""
Configuration management for envbench.
Defaults come from environment variables and the project .env file;
CLI flags or request query parameters are merged over them.
"""

import logging
import math
import os
import random
import re
import string
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env file from project root
PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


class ConfigurationError(Exception):
    """Raised when a startup parameter is malformed."""
    pass


def generate_random_string(length: int = 10) -> str:
    """Random alphanumeric string, used for scratch table names."""
    alphabet = string.digits + string.ascii_letters
    return "".join(random.choice(alphabet) for _ in range(length))


class Config:
    """Central configuration management."""

    SCRIPT_NAME = "ENVBENCH - Python Benchmark tool"
    MIN_PYTHON_VERSION = (3, 10)

    # Prefix of the connection-string environment convention
    CONNECTION_STRING_PREFIX = "MYSQLCONNSTR_"

    @classmethod
    def get_defaults(cls) -> Dict[str, Any]:
        """Default settings, read from the environment at call time."""
        return {
            # Increase the multiplier to benchmark longer
            "multiplier": os.getenv("ENVBENCH_MULTIPLIER", "1.0"),
            "output_width": os.getenv("ENVBENCH_OUTPUT_WIDTH", "55"),
            "mysql_host": os.getenv("MYSQL_HOST", "127.0.0.1"),
            "mysql_user": os.getenv("MYSQL_USER") or None,
            "mysql_password": os.getenv("MYSQL_PASSWORD") or None,
            "mysql_port": os.getenv("MYSQL_PORT", "3306"),
            "mysql_database": os.getenv("MYSQL_DATABASE", "envbench"),
            "mysql_table": "_envbench_test_" + generate_random_string(6),
            "mysql_socket": os.getenv("MYSQL_SOCKET") or None,
        }

    @classmethod
    def min_python_message(cls) -> str:
        major, minor = cls.MIN_PYTHON_VERSION
        return f"This script requires Python {major}.{minor} or higher."


@dataclass(frozen=True)
class RunConfiguration:
    """
    Resolved settings for one run. Immutable after resolution.

    Attributes:
        multiplier: Difficulty multiplier applied to every case's iteration count
        output_width: Report line width in characters
        mysql_*: Database connection parameters; the database is optional
    """
    multiplier: float = 1.0
    output_width: int = 55
    mysql_host: Optional[str] = "127.0.0.1"
    mysql_user: Optional[str] = None
    mysql_password: Optional[str] = field(default=None, repr=False)
    mysql_port: int = 3306
    mysql_database: str = "envbench"
    mysql_table: str = "_envbench_test"
    mysql_socket: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, without the password."""
        data = asdict(self)
        data.pop("mysql_password")
        return data


_FIELDS = set(RunConfiguration.__dataclass_fields__)


def _to_float(key: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid value for {key}: {value!r} (expected a number)")


def _to_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid value for {key}: {value!r} (expected an integer)")


def resolve_configuration(*sources: Optional[Mapping[str, Any]]) -> RunConfiguration:
    """
    Merge settings over the defaults and validate them.

    Args:
        *sources: Key/value mappings; later sources take precedence

    Returns:
        RunConfiguration

    Raises:
        ConfigurationError: If a value is malformed or out of range
    """
    merged: Dict[str, Any] = Config.get_defaults()
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            if key not in _FIELDS:
                logger.debug(f"Ignoring unknown setting: {key}")
                continue
            merged[key] = value

    multiplier = _to_float("multiplier", merged["multiplier"])
    if not math.isfinite(multiplier) or multiplier < 0:
        raise ConfigurationError(f"Invalid value for multiplier: {merged['multiplier']!r} (must be >= 0)")

    output_width = _to_int("output_width", merged["output_width"])
    if output_width < 1:
        raise ConfigurationError(f"Invalid value for output_width: {output_width} (must be >= 1)")

    mysql_port = _to_int("mysql_port", merged["mysql_port"])
    if not 1 <= mysql_port <= 65535:
        raise ConfigurationError(f"Invalid value for mysql_port: {mysql_port} (must be 1-65535)")

    if not merged["mysql_database"]:
        raise ConfigurationError("mysql_database must not be empty")
    if not merged["mysql_table"]:
        raise ConfigurationError("mysql_table must not be empty")

    config = RunConfiguration(
        multiplier=multiplier,
        output_width=output_width,
        mysql_host=merged["mysql_host"] or None,
        mysql_user=merged["mysql_user"],
        mysql_password=merged["mysql_password"],
        mysql_port=mysql_port,
        mysql_database=merged["mysql_database"],
        mysql_table=merged["mysql_table"],
        mysql_socket=merged["mysql_socket"] or None,
    )
    logger.debug(f"Resolved configuration: {config}")
    return config


_CONNECTION_STRING_FIELDS = {
    "mysql_host": re.compile(r"Data Source=(.+?);"),
    "mysql_database": re.compile(r"Database=(.+?);"),
    "mysql_user": re.compile(r"User Id=(.+?);"),
    "mysql_password": re.compile(r"Password=(.+)$"),
}


def parse_connection_string(value: str) -> Dict[str, str]:
    """
    Parse a ``Data Source=...;Database=...;User Id=...;Password=...`` string.

    The password is taken to the end of the string, so it may contain ``;``.
    """
    settings = {}
    for key, pattern in _CONNECTION_STRING_FIELDS.items():
        match = pattern.search(value)
        if match:
            settings[key] = match.group(1)
    return settings


def connection_string_settings(environ: Mapping[str, Any]) -> Dict[str, str]:
    """Settings from every ``MYSQLCONNSTR_*`` entry of ``environ``."""
    settings: Dict[str, str] = {}
    for key, value in environ.items():
        if not key.startswith(Config.CONNECTION_STRING_PREFIX):
            continue
        settings.update(parse_connection_string(str(value)))
    return settings
