"""Configuration model for catalog_verifier."""

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, field_validator

from ..catalog import DEFAULT_FORMATS

OUTPUT_FORMATS = ("text", "json")


class Settings(BaseModel):
    """Where to look for catalogs and how to report findings."""

    search_paths: List[Path] = Field(default_factory=lambda: [Path(".")])
    formats: List[str] = Field(default_factory=lambda: list(DEFAULT_FORMATS))
    encoding: str = "utf-8"
    parent_fallback: bool = True
    root_fallback: bool = False
    debug: bool = False
    output_format: str = "text"

    @field_validator("search_paths")
    @classmethod
    def validate_search_paths(cls, value: List[Path]) -> List[Path]:
        if not value:
            raise ValueError("at least one search path is required")
        return value

    @field_validator("formats")
    @classmethod
    def validate_formats(cls, value: List[str]) -> List[str]:
        normalized = [fmt.lower().lstrip(".") for fmt in value]
        unknown = [fmt for fmt in normalized if fmt not in DEFAULT_FORMATS]
        if unknown:
            raise ValueError(f"unsupported catalog formats: {', '.join(unknown)}")
        if not normalized:
            raise ValueError("at least one catalog format is required")
        return normalized

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, value: str) -> str:
        value = value.lower()
        if value not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {', '.join(OUTPUT_FORMATS)}")
        return value
