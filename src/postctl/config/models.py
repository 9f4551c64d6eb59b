"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``postctl.toml`` only holds
overrides. A Jekyll-style site needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    posts_dir: str = "_posts"
    drafts_dir: str = "_drafts"
    extensions: list[str] = Field(default_factory=lambda: [".markdown", ".md"])
    default_extension: str = ".markdown"

    @field_validator("extensions")
    @classmethod
    def _dotted(cls, value: list[str]) -> list[str]:
        return [ext if ext.startswith(".") else f".{ext}" for ext in value]

    @field_validator("default_extension")
    @classmethod
    def _dotted_default(cls, value: str) -> str:
        return value if value.startswith(".") else f".{value}"


class PostsConfig(BaseModel):
    """[posts] section."""

    model_config = {"frozen": True}

    required_keys: list[str] = Field(default_factory=lambda: ["layout", "title"])
    default_layout: str = "post"
    # Empty means any layout is accepted.
    allowed_layouts: list[str] = Field(default_factory=list)


class CheckConfig(BaseModel):
    """[check] section."""

    model_config = {"frozen": True}

    require_fence_language: bool = False
    check_drafts: bool = False

