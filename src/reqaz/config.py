"""Configuration management for reqaz.

Supports TOML configuration format with auto-discovery.
"""

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from reqaz.core.includes import DEFAULT_MAX_INCLUDE_DEPTH

CONFIG_FILENAME = "reqaz.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 5000


@dataclass
class ContentConfig:
    """Content tree configuration."""

    root: Path = field(default_factory=lambda: Path.cwd())
    max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH


@dataclass
class LogConfig:
    """Request logging configuration."""

    enabled: bool = False


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    content: ContentConfig
    log: LogConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for reqaz.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults (content root is the cwd)."""
        return cls(
            server=ServerConfig(),
            content=ContentConfig(),
            log=LogConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            content=cls._parse_content(data.get("content"), config_dir),
            log=cls._parse_log(data.get("log")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 5000)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_content(cls, data: object, config_dir: Path) -> ContentConfig:
        """Parse content configuration section.

        Args:
            data: Raw content section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ContentConfig instance
        """
        if data is None:
            return ContentConfig(root=config_dir)

        if not isinstance(data, dict):
            raise ValueError("content section must be a dictionary")

        root = data.get("root", ".")
        if not isinstance(root, str):
            raise ValueError("content.root must be a string")

        max_include_depth = data.get("max_include_depth", DEFAULT_MAX_INCLUDE_DEPTH)
        if not isinstance(max_include_depth, int) or isinstance(max_include_depth, bool):
            raise ValueError("content.max_include_depth must be an integer")
        if max_include_depth < 1:
            raise ValueError("content.max_include_depth must be at least 1")

        return ContentConfig(
            root=config_dir / root,
            max_include_depth=max_include_depth,
        )

    @classmethod
    def _parse_log(cls, data: object) -> LogConfig:
        if data is None:
            return LogConfig()

        if not isinstance(data, dict):
            raise ValueError("log section must be a dictionary")

        enabled = data.get("enabled", False)
        if not isinstance(enabled, bool):
            raise ValueError("log.enabled must be a boolean")

        return LogConfig(enabled=enabled)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        root: Path | None = None,
        log_enabled: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            root: Override content.root
            log_enabled: Override log.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        content = self.content
        if root is not None:
            content = replace(self.content, root=root)

        log = self.log
        if log_enabled is not None:
            log = replace(self.log, enabled=log_enabled)

        return replace(self, server=server, content=content, log=log)
