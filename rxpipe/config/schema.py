# rxpipe/config/schema.py
"""
Configuration schema for pipes.

Example YAML:
    encoding: utf-8
    read_size: 65536
    high_water_mark: 16
    max_chunk_length: null
"""

from __future__ import annotations

import codecs
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PipeConfig(BaseModel):
    """Runtime settings shared by every operation of a pipe."""

    encoding: str = Field(default="utf-8", description="Text encoding for files and binary handles")
    read_size: int = Field(default=65536, ge=1, description="Characters/bytes per source read")
    high_water_mark: int = Field(default=16, ge=1, description="Queue capacity between stages")
    max_chunk_length: Optional[int] = Field(
        default=None, ge=1, description="Longest undelimited text the splitter may buffer"
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value!r}") from e
        return value


__all__ = ["PipeConfig"]
