"""
Config system - Layered configuration for the database layer.

Sources, later overriding earlier:
1. Config files (YAML or JSON)
2. ``.env`` file
3. Environment variables (``SIMPLEDB_*`` prefix)
4. Manual overrides

Also parses ``user:password@host/database`` connection strings.
"""

from __future__ import annotations

import json
import logging
import os
import re
import types
from dataclasses import MISSING, dataclass, fields, is_dataclass
from glob import glob
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Type, get_args, get_origin, get_type_hints
from urllib.parse import quote

import yaml

if TYPE_CHECKING:
    from .db.engine import Database

logger = logging.getLogger("simpledb.config")

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "DatabaseConfig",
    "parse_connection_string",
    "connection_string_to_url",
    "configure_database",
]

_CONNECTION_RE = re.compile(
    r"^(?P<username>[^:@/]+)"
    r"(?::(?P<password>[^@]*))?"
    r"@(?P<host>[^/:]+)"
    r"(?::(?P<port>\d+))?"
    r"/(?P<database>[^/]+)$"
)


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass
class DatabaseConfig:
    """Typed ``database`` section."""

    url: str = "sqlite:///db.sqlite3"
    debug: bool = False
    connect_retries: int = 3
    connect_retry_delay: float = 0.5


# ── Connection strings ───────────────────────────────────────────────────────


def parse_connection_string(connection: str) -> Dict[str, Any]:
    """
    Parse ``username:password@host[:port]/database``; the password is optional.

    Raises:
        ConfigError: If the string does not match that shape.
    """
    match = _CONNECTION_RE.match(connection.strip())
    if match is None:
        raise ConfigError(
            f"Invalid connection string '{connection}', "
            f"expected username:password@host/database"
        )
    parts = match.groupdict()
    return {
        "username": parts["username"],
        "password": parts["password"] or "",
        "host": parts["host"],
        "port": int(parts["port"]) if parts["port"] else None,
        "database": parts["database"],
    }


def connection_string_to_url(connection: str) -> str:
    """Convert a connection string to a ``mysql://`` URL."""
    parts = parse_connection_string(connection)
    credentials = quote(parts["username"], safe="")
    if parts["password"]:
        credentials += ":" + quote(parts["password"], safe="")
    host = parts["host"] + (f":{parts['port']}" if parts["port"] else "")
    return f"mysql://{credentials}@{host}/{parts['database']}"


# ── Loader ───────────────────────────────────────────────────────────────────


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources with precedence:
    overrides > environment variables > .env file > config files > defaults
    """

    def __init__(self, env_prefix: str = "SIMPLEDB_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[list[str]] = None,
        env_prefix: str = "SIMPLEDB_",
        env_file: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> ConfigLoader:
        """
        Load configuration from multiple sources.

        Args:
            paths: Config file paths (glob patterns supported)
            env_prefix: Prefix for environment variables
            env_file: Path to .env file
            overrides: Manual overrides (highest precedence)

        Returns:
            Configured ConfigLoader instance
        """
        loader = cls(env_prefix=env_prefix)

        for pattern in paths or []:
            loader._load_from_files(pattern)

        if env_file:
            loader._load_env_file(env_file)

        loader._load_from_env()

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return loader

    def _load_from_files(self, pattern: str):
        """Load config from JSON or YAML files."""
        for path_str in sorted(glob(pattern)):
            path = Path(path_str)
            if path.suffix == ".json":
                self._load_json_file(path)
            elif path.suffix in (".yaml", ".yml"):
                self._load_yaml_file(path)
            else:
                logger.warning(f"Ignoring config file with unknown type: {path}")

    def _load_json_file(self, path: Path):
        with open(path) as f:
            self._merge_dict(self.config_data, json.load(f))

    def _load_yaml_file(self, path: Path):
        with open(path) as f:
            data = yaml.safe_load(f)
            if data:
                self._merge_dict(self.config_data, data)

    def _load_env_file(self, path: str):
        """Load prefixed keys from a .env file."""
        env_path = Path(path)
        if not env_path.exists():
            return

        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue

                if "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip().strip('"').strip("'")

                    if key.startswith(self.env_prefix):
                        self._set_nested(key, value)

    def _load_from_env(self):
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert SIMPLEDB_DATABASE__URL to config_data["database"]["url"]."""
        key = key[len(self.env_prefix):]

        # Double underscore separates nesting levels
        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: dict):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._merge_dict(target[key], value)
            else:
                target[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value by dot-separated path."""
        current = self.config_data
        for part in path.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def database_config(self) -> DatabaseConfig:
        """Build the validated ``database`` section."""
        return self._instantiate_dataclass(DatabaseConfig, self.get("database", {}))

    def _instantiate_dataclass(self, config_class: Type, data: dict):
        """Instantiate dataclass config with validation."""
        if not is_dataclass(config_class):
            raise ConfigError(f"{config_class.__name__} is not a dataclass")

        hints = get_type_hints(config_class)
        kwargs = {}

        for field_info in fields(config_class):
            field_name = field_info.name
            field_type = hints.get(field_name, Any)

            if field_name in data:
                value = data[field_name]
                # Integers are acceptable where a float is declared
                if field_type is float and isinstance(value, int) and not isinstance(value, bool):
                    value = float(value)

                if not self._check_type(value, field_type):
                    raise ConfigError(
                        f"Config field '{field_name}' expected {field_type}, "
                        f"got {type(value).__name__}"
                    )

                kwargs[field_name] = value
            elif field_info.default is not MISSING:
                kwargs[field_name] = field_info.default
            elif field_info.default_factory is not MISSING:
                kwargs[field_name] = field_info.default_factory()
            else:
                raise ConfigError(
                    f"Required config field '{field_name}' not provided"
                )

        return config_class(**kwargs)

    def _check_type(self, value: Any, expected_type: Any) -> bool:
        """Basic type checking."""
        if expected_type is Any:
            return True

        origin = get_origin(expected_type)
        if origin is types.UnionType or str(origin) == "typing.Union":
            args = get_args(expected_type)
            if value is None:
                return True
            if args:
                return self._check_type(value, args[0])

        if origin:
            return isinstance(value, origin)

        # bool is an int subclass; don't accept it for numeric fields
        if expected_type in (int, float) and isinstance(value, bool):
            return False

        try:
            return isinstance(value, expected_type)
        except TypeError:
            return True

    def to_dict(self) -> dict:
        """Export all config as dictionary."""
        return self.config_data.copy()


def configure_database(config: Optional[DatabaseConfig] = None) -> Database:
    """Build a ``Database`` from a ``DatabaseConfig`` (defaults when omitted)."""
    from .db.engine import Database

    config = config or DatabaseConfig()
    return Database(
        config.url,
        debug=config.debug,
        connect_retries=config.connect_retries,
        connect_retry_delay=config.connect_retry_delay,
    )
