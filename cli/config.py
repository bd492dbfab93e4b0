"""Configuration models and loaders for CLI commands."""

from __future__ import annotations

import json
import tomllib
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from summons_tracker.core.errors import UnknownViewError
from summons_tracker.views.classifier import normalize_view

# Configuration Models

class TrackerConfig(BaseModel):
    """Configuration for worklist and stats commands."""
    snapshot: Path = Path("data/summons.json")
    today: Optional[date] = Field(None, description="Reference day (defaults to the wall clock)")
    view: str = "All Summons"
    limit: int = Field(50, ge=1)

    @field_validator("view")
    @classmethod
    def _canonical_view(cls, v: str) -> str:
        try:
            return normalize_view(v).value
        except UnknownViewError as e:
            raise ValueError(str(e)) from e


class TransitionConfig(BaseModel):
    """Configuration for the transition command."""
    snapshot: Path = Path("data/summons.json")
    summons_id: str = Field(..., min_length=1)
    patch: Dict[str, Any] = Field(default_factory=dict)
    target: Optional[str] = None
    save: bool = False


# Configuration Loaders

def _read_config(path: Path) -> Dict[str, Any]:
    """Read configuration from .toml or .json file."""
    suf = path.suffix.lower()
    if suf == ".json":
        return json.loads(path.read_text(encoding="utf-8"))
    if suf == ".toml":
        return tomllib.loads(path.read_text(encoding="utf-8"))
    raise ValueError(f"Unsupported config format: {path.suffix}. Use .toml or .json")


def load_tracker_config(path: Path) -> TrackerConfig:
    """Load worklist configuration from file."""
    data = _read_config(path)
    return TrackerConfig(**data)


def load_transition_config(path: Path) -> TransitionConfig:
    """Load transition configuration from file."""
    data = _read_config(path)
    return TransitionConfig(**data)
