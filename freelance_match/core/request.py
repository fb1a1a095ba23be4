"""MatchRequest model: one set of criteria plus the candidate pool, loaded from YAML or JSON."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator

from freelance_match.core.schemas import CamelModel, FreelancerProfile, MatchingCriteria


class MatchRequest(CamelModel):
    """Input to a matching run, as supplied by the profile store."""

    criteria: MatchingCriteria
    candidates: list[FreelancerProfile] = Field(default_factory=list)
    exclude_profiles: list[str] = Field(default_factory=list)

    @field_validator("exclude_profiles")
    @classmethod
    def strip_profile_ids(cls, v: list[str]) -> list[str]:
        return [pid.strip() for pid in v if pid.strip()]

    @classmethod
    def from_file(cls, path: str | Path) -> "MatchRequest":
        """Load a request from a YAML or JSON file (JSON parses as YAML)."""
        path = Path(path)
        if not path.exists():
            msg = f"Request file not found: {path}"
            raise FileNotFoundError(msg)
        raw: Any = yaml.safe_load(path.read_text())
        if not isinstance(raw, dict):
            msg = f"Request file must contain a mapping: {path}"
            raise ValueError(msg)
        return cls.model_validate(raw)
