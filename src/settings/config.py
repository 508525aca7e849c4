from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any

import tomllib
from pydantic import BaseModel, ConfigDict, Field, field_validator

from contract.layout import DEFAULT_CONTENTS_FILENAME, DEFAULT_OUTPUT_DIR
from render.markdown import RenderOptions
from symbols.keys import AccessLevel

CONFIG_FILENAME = "sourcedocs.toml"


class DocsConfig(BaseModel):
    """Configuration for documentation generation."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=DEFAULT_OUTPUT_DIR,
        description="Output directory for generated documentation",
    )
    contents_filename: str = Field(
        default=DEFAULT_CONTENTS_FILENAME,
        description="File name of the root contents document",
    )
    module_name: str | None = Field(
        default=None,
        description="Module name, used when include_module_name_in_path is set",
    )
    include_module_name_in_path: bool = Field(
        default=False,
        description="Write documentation under <output_dir>/<module_name>",
    )
    clean: bool = Field(
        default=False,
        description="Delete previously generated documentation before writing",
    )
    collapsible_sections: bool = Field(
        default=False,
        description="Wrap member groups in collapsed <details> blocks",
    )
    table_of_contents: bool = Field(
        default=False,
        description="Prepend a member table of contents to each document",
    )
    min_access_level: AccessLevel | None = Field(
        default=None,
        description="Only document declarations at least this visible",
    )

    @field_validator("contents_filename")
    @classmethod
    def validate_contents_filename(cls, v: str) -> str:
        """Contents file must be a bare Markdown file name."""
        if not v or PurePosixPath(v).name != v or "\\" in v:
            msg = "contents_filename must be a file name without directories"
            raise ValueError(msg)
        if not v.endswith(".md"):
            msg = "contents_filename must end with .md"
            raise ValueError(msg)
        return v

    @field_validator("min_access_level", mode="before")
    @classmethod
    def validate_min_access_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            level = AccessLevel.from_accessibility_key(v)
            if level is None:
                msg = (
                    f"Invalid access level '{v}'. "
                    f"Valid levels: {', '.join(item.value for item in AccessLevel)}"
                )
                raise ValueError(msg)
            return level
        return v

    @property
    def render_options(self) -> RenderOptions:
        return RenderOptions(
            collapsible_sections=self.collapsible_sections,
            table_of_contents=self.table_of_contents,
        )


class ConfigError(Exception):
    """Raised when config file exists but cannot be parsed."""


def resolve_docs_path(root: Path, config: DocsConfig) -> Path:
    """Resolve the directory documentation is written to.

    Relative output directories are taken relative to ``root``. With
    ``include_module_name_in_path`` the module name is appended and is then
    required.
    """
    output_dir = config.output_dir
    if not output_dir:
        msg = "output_dir must be a non-empty path"
        raise ConfigError(msg)

    docs_path = Path(output_dir).expanduser()
    if not docs_path.is_absolute():
        docs_path = root / docs_path

    if config.include_module_name_in_path:
        if not config.module_name:
            msg = "include_module_name_in_path requires module_name"
            raise ConfigError(msg)
        docs_path = docs_path / config.module_name

    try:
        return docs_path.resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc


def load_config(root: Path) -> DocsConfig:
    """Load configuration from sourcedocs.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return DocsConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return DocsConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


def apply_overrides(config: DocsConfig, **overrides: Any) -> DocsConfig:
    """Return a copy of ``config`` with non-None overrides validated in."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return config
    try:
        return DocsConfig.model_validate({**config.model_dump(), **updates})
    except Exception as e:
        msg = f"Invalid option: {e}"
        raise ConfigError(msg) from e
