from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_FILENAME = "postmatter.yml"


class LintConfig(BaseModel):
    """Options controlling workspace lint checks."""

    required_keys: list[str] = Field(
        default_factory=lambda: ["title"],
        description="Metadata keys every document is expected to define.",
    )
    list_keys: list[str] = Field(
        default_factory=lambda: ["tags"],
        description="Metadata keys expected to hold bracketed lists.",
    )


class Config(BaseModel):
    project_name: str = Field(default="Postmatter Project")
    content_dir: Path = Field(default=Path("content"))
    output_dir: Path = Field(default=Path("site"))
    suffixes: list[str] = Field(
        default_factory=lambda: [".md", ".markdown", ".mdx", ".html"],
        description="File suffixes treated as content resources.",
    )
    encoding: str = Field(default="utf-8", description="Text encoding of content resources.")
    lint: LintConfig = Field(default_factory=LintConfig)

    @field_validator("content_dir", "output_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("suffixes")
    def _normalize_suffixes(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for suffix in value:
            text = suffix.strip().lower()
            if not text:
                continue
            if not text.startswith("."):
                text = f".{text}"
            if text not in normalized:
                normalized.append(text)
        if not normalized:
            raise ValueError("At least one content suffix is required.")
        return normalized


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    The ``path`` argument may point to a file (e.g., ``/site/postmatter.yml``) or a
    directory containing that file. All relative paths inside the configuration
    are interpreted relative to the directory holding the config file.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    base_dir: Path
    if candidate.is_dir():
        # A project directory without a config file falls back to defaults.
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    cfg = Config(**data)

    def _abs_required(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.content_dir = _abs_required(cfg.content_dir)
    cfg.output_dir = _abs_required(cfg.output_dir)
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} should define a mapping.")
    return data
