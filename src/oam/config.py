"""
OAM configuration.

Settings come from the ``[mock]`` table of an ``oam.toml`` file, overridden
by CLI options and, for the log level, the ``OAM_LOG_LEVEL`` environment
variable.

Example ``oam.toml``::

    [mock]
    seed = 12345
    host = "127.0.0.1"
    port = 4000
    log_level = "INFO"
"""

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path

from oam.core.errors import ConfigError
from oam.mock.seed import DEFAULT_SEED

DEFAULT_CONFIG_FILE = "oam.toml"
LOG_LEVEL_ENV_VAR = "OAM_LOG_LEVEL"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class MockConfig:
    """Mock server configuration."""

    seed: int = DEFAULT_SEED
    host: str = "127.0.0.1"
    port: int = 4000
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level '{self.log_level}'")

    def with_overrides(
        self,
        *,
        seed: int | None = None,
        host: str | None = None,
        port: int | None = None,
        log_level: str | None = None,
    ) -> "MockConfig":
        """Return a copy with every non-None override applied."""
        changes = {
            name: value
            for name, value in (
                ("seed", seed),
                ("host", host),
                ("port", port),
                ("log_level", log_level.upper() if log_level else None),
            )
            if value is not None
        }
        return replace(self, **changes)


def _expect(data: dict, name: str, kind: type, default: object) -> object:
    value = data.get(name, default)
    # bool is an int subclass; reject it for numeric settings
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(f"[mock].{name} must be of type {kind.__name__}, got {value!r}")
    return value


def load_config(path: Path | None = None) -> MockConfig:
    """Load configuration from a TOML file.

    Args:
        path: Config file path. Defaults to ``oam.toml`` in the working
            directory; a missing file yields the defaults.

    Returns:
        The loaded MockConfig, with ``OAM_LOG_LEVEL`` applied.

    Raises:
        ConfigError: If the file is invalid TOML or has mistyped values.
    """
    path = path or Path(DEFAULT_CONFIG_FILE)
    config = MockConfig()

    if path.exists():
        try:
            data = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

        mock = data.get("mock", {})
        if not isinstance(mock, dict):
            raise ConfigError(f"[mock] in {path} must be a table")

        config = MockConfig(
            seed=_expect(mock, "seed", int, config.seed),
            host=_expect(mock, "host", str, config.host),
            port=_expect(mock, "port", int, config.port),
            log_level=str(_expect(mock, "log_level", str, config.log_level)).upper(),
        )

    env_level = os.environ.get(LOG_LEVEL_ENV_VAR)
    if env_level:
        config = config.with_overrides(log_level=env_level)

    return config
