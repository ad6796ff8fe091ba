"""
Configuration management for pg_seqcheck.

Supports:
- TOML config files
- JSON config files in the legacy {"postgres": {...}} layout
- Environment variables
- Command-line overrides

Priority (highest to lowest):
1. Command-line arguments
2. Environment variables
3. Config file
4. Defaults
"""

import json
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib

from .protocol.errors import ConfigError


# File names looked up inside a config directory (searched in order)
CONFIG_FILE_NAMES = ["config.toml", "pg_seqcheck.toml", "config.json"]

# Default config file locations (searched in order)
CONFIG_SEARCH_PATHS = [
    Path.cwd() / "config.toml",
    Path.cwd() / "pg_seqcheck.toml",
    Path.home() / ".pg_seqcheck" / "config.toml",
    Path.home() / ".config" / "pg_seqcheck" / "config.toml",
]


@dataclass
class DatabaseConfig:
    """Database connection configuration."""
    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = ""
    name: str = "postgres"
    sslmode: str = "disable"
    connect_timeout: int = 5

    def connection_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for psycopg2.connect()."""
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "dbname": self.name,
            "sslmode": self.sslmode,
            "connect_timeout": self.connect_timeout,
        }

    def dsn_summary(self) -> str:
        """Connection target without the password."""
        return f"{self.user}@{self.host}:{self.port}/{self.name}"


@dataclass
class ScanConfig:
    """What to scan and how."""
    schema: Optional[str] = None
    dedupe: bool = False    # visit each distinct default expression once


@dataclass
class OutputConfig:
    """Output configuration."""
    format: str = "text"    # text, json
    verbose: bool = False
    quiet: bool = False


@dataclass
class Config:
    """Main configuration container."""
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # Source tracking
    _config_file: Optional[Path] = None

    @property
    def config_file(self) -> Optional[Path]:
        return self._config_file

    @classmethod
    def load(cls, config_path: Optional[str] = None, search: bool = True) -> "Config":
        """
        Load configuration from file.

        Args:
            config_path: Config file, or a directory holding one. If None,
                searches default locations (when `search` is set).

        Returns:
            Config instance with loaded values
        """
        config = cls()

        if config_path:
            path = cls._resolve_path(Path(config_path))
        elif search:
            path = cls._find_config_file()
        else:
            path = None

        if path:
            config = cls._load_from_file(path)
            config._config_file = path

        return config

    @classmethod
    def _resolve_path(cls, path: Path) -> Path:
        """Resolve an explicit file or directory to a config file."""
        if path.is_dir():
            for name in CONFIG_FILE_NAMES:
                candidate = path / name
                if candidate.exists():
                    return candidate
            raise ConfigError(
                f"No config file ({', '.join(CONFIG_FILE_NAMES)}) in directory: {path}"
            )
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        return path

    @classmethod
    def _find_config_file(cls) -> Optional[Path]:
        """Find config file in default locations."""
        for path in CONFIG_SEARCH_PATHS:
            if path.exists():
                return path
        return None

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load config from a TOML or JSON file."""
        try:
            if path.suffix == ".json":
                with open(path, "r") as f:
                    data = json.load(f)
            else:
                with open(path, "rb") as f:
                    data = tomllib.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to read config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must contain a table/object at top level")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        # Database ([postgres] is the legacy section name)
        db = cls._section(data, "database") or cls._section(data, "postgres")
        if db:
            try:
                port = int(db.get("port", config.database.port))
                timeout = int(db.get("connect_timeout", config.database.connect_timeout))
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Invalid database port/timeout: {e}") from e
            config.database = DatabaseConfig(
                host=db.get("host", config.database.host),
                port=port,
                user=db.get("user", config.database.user),
                password=db.get("password", config.database.password),
                name=db.get("name", db.get("dbname", config.database.name)),
                sslmode=db.get("sslmode", config.database.sslmode),
                connect_timeout=timeout,
            )

        # Scan
        scan = cls._section(data, "scan")
        if scan:
            schema = scan.get("schema", config.scan.schema)
            if schema is not None and not isinstance(schema, str):
                raise ConfigError(f"[scan] schema must be a string, got {type(schema).__name__}")
            config.scan = ScanConfig(
                schema=schema,
                dedupe=bool(scan.get("dedupe", config.scan.dedupe)),
            )

        # Output
        out = cls._section(data, "output")
        if out:
            config.output = OutputConfig(
                format=out.get("format", config.output.format),
                verbose=out.get("verbose", config.output.verbose),
                quiet=out.get("quiet", config.output.quiet),
            )

        return config

    @staticmethod
    def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        """A config section; must be a table when present."""
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigError(f"[{name}] must be a table, got {type(section).__name__}")
        return section

    def override_from_env(self, environ: Optional[Dict[str, str]] = None) -> "Config":
        """Apply libpq-style environment variables."""
        env = os.environ if environ is None else environ

        if env.get("PGHOST"):
            self.database.host = env["PGHOST"]
        if env.get("PGPORT"):
            try:
                self.database.port = int(env["PGPORT"])
            except ValueError as e:
                raise ConfigError(f"Invalid PGPORT: {env['PGPORT']}") from e
        if env.get("PGUSER"):
            self.database.user = env["PGUSER"]
        if env.get("PGPASSWORD"):
            self.database.password = env["PGPASSWORD"]
        if env.get("PGDATABASE"):
            self.database.name = env["PGDATABASE"]
        if env.get("PGSSLMODE"):
            self.database.sslmode = env["PGSSLMODE"]

        return self

    def override_from_args(self, args) -> "Config":
        """
        Override config values from argparse namespace.

        Args with value None are ignored (keeping config file values).
        """
        # Database overrides
        if getattr(args, "host", None):
            self.database.host = args.host
        if getattr(args, "port", None):
            self.database.port = args.port
        if getattr(args, "user", None):
            self.database.user = args.user
        if getattr(args, "password", None):
            self.database.password = args.password
        if getattr(args, "database", None):
            self.database.name = args.database
        if getattr(args, "sslmode", None):
            self.database.sslmode = args.sslmode

        # Scan overrides
        if getattr(args, "sequence_repeat", None):
            self.scan.schema = args.sequence_repeat
        if getattr(args, "dedupe", None):
            self.scan.dedupe = True

        # Output overrides
        if getattr(args, "output", None):
            self.output.format = args.output
        if getattr(args, "verbose", None):
            self.output.verbose = True
        if getattr(args, "quiet", None):
            self.output.quiet = True

        return self

    def validate(self) -> list:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.database.host:
            errors.append("Database host is required")
        if not self.database.user:
            errors.append("Database user is required")
        if not 0 < self.database.port < 65536:
            errors.append(f"Database port out of range: {self.database.port}")
        if self.database.connect_timeout < 1:
            errors.append("Connect timeout must be at least 1 second")
        if self.scan.schema is not None and not isinstance(self.scan.schema, str):
            errors.append("Schema name must be a string")
        elif self.scan.schema is not None and not self.scan.schema.strip():
            errors.append("Schema name must not be blank")
        if self.output.format not in ("text", "json"):
            errors.append(f"Unknown output format: {self.output.format}")

        return errors

    def summary(self, include_config_path: bool = True) -> str:
        """Generate human-readable config summary."""
        lines = []

        if include_config_path:
            if self._config_file:
                lines.append(f"Config: {self._config_file}")
            else:
                lines.append("Config: (defaults)")

        lines.append(f"Database: {self.database.dsn_summary()} (sslmode={self.database.sslmode})")
        lines.append(f"Schema: {self.scan.schema or '(none)'}")
        lines.append(f"Dedupe: {'on' if self.scan.dedupe else 'off'}")

        return "\n".join(lines)
