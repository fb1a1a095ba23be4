"""Configuration models and YAML loader for the matching engine."""

import math
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator


class ScoringWeights(BaseModel):
    """Weights of the convex combination of sub-scores. Must sum to 1.0."""

    skills: float = Field(default=0.30, ge=0.0, le=1.0)
    categories: float = Field(default=0.25, ge=0.0, le=1.0)
    availability: float = Field(default=0.20, ge=0.0, le=1.0)
    budget: float = Field(default=0.15, ge=0.0, le=1.0)
    timeline: float = Field(default=0.10, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> "ScoringWeights":
        total = self.skills + self.categories + self.availability + self.budget + self.timeline
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            msg = f"scoring weights must sum to 1.0, got {total:.4f}"
            raise ValueError(msg)
        return self


class ScoringConfig(BaseModel):
    """Weight table plus the additive semantic boost factor."""

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    semantic_boost_weight: float = Field(default=0.1, ge=0.0, le=1.0)


class MatchingOptions(BaseModel):
    """Per-request result shaping."""

    max_results: int = Field(default=20, ge=0)
    min_score: float = Field(default=0.3, ge=0.0, le=1.0)
    use_semantic_search: bool = True


class FilterConfig(BaseModel):
    """Eligibility filters applied before scoring."""

    exclude_profiles: list[str] = Field(default_factory=list)
    require_verification: bool = False
    drop_duplicates: bool = True


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    options: MatchingOptions = Field(default_factory=MatchingOptions)
    filters: FilterConfig = Field(default_factory=FilterConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
