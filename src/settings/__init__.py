"""Configuration for sourcedocs."""

from settings.config import (
    CONFIG_FILENAME,
    ConfigError,
    DocsConfig,
    apply_overrides,
    load_config,
    resolve_docs_path,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DocsConfig",
    "apply_overrides",
    "load_config",
    "resolve_docs_path",
]
