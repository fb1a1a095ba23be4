"""Core data models for freelancer-to-project matching.

All models are frozen. Attributes are snake_case; camelCase aliases keep the
marketplace's JSON field names (freelancerId, matchScore, hoursPerWeek, ...).
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Frozen base model that accepts both snake_case names and camelCase aliases."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class ComplexityLevel(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    ENTERPRISE = "enterprise"


class WorkType(str, Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    CONTRACT = "contract"
    ONE_TIME = "one_time"


class VerificationType(str, Enum):
    IDENTITY = "identity"
    SKILL = "skill"
    EDUCATION = "education"
    CERTIFICATION = "certification"
    PORTFOLIO = "portfolio"
    CLIENT_REFERENCE = "client_reference"


class VerificationStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"
    EXPIRED = "expired"


# ---------------------------------------------------------------------------
# Matching request
# ---------------------------------------------------------------------------


class BudgetRange(CamelModel):
    """Client budget. min <= max is the caller's responsibility; either bound may be unset."""

    min: float | None = None
    max: float | None = None
    currency: str = "USD"
    type: Literal["hourly", "fixed"] = "hourly"


class TimelineRange(CamelModel):
    start: datetime
    end: datetime
    urgency: Literal["low", "medium", "high", "urgent"] = "medium"


class MatchingCriteria(CamelModel):
    """Project requirements driving one matching request."""

    categories: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    budget: BudgetRange | None = None
    timeline: TimelineRange | None = None
    complexity: ComplexityLevel | None = None
    work_type: WorkType | None = None
    location: str | None = None
    timezone: str | None = None
    languages: list[str] = Field(default_factory=list)
    verification_required: bool = False
    rating_minimum: float | None = None
    response_time_max: float | None = None


# ---------------------------------------------------------------------------
# Freelancer profile
# ---------------------------------------------------------------------------


class FreelancerSkill(CamelModel):
    skill_id: str
    level: SkillLevel = SkillLevel.BEGINNER
    experience: float = 0.0
    verified: bool = False
    verification_date: datetime | None = None
    certifications: list[str] = Field(default_factory=list)
    portfolio_items: list[str] = Field(default_factory=list)


class FreelancerTool(CamelModel):
    tool_id: str
    proficiency: str = ""
    experience: float = 0.0
    certifications: list[str] = Field(default_factory=list)


class PortfolioItem(CamelModel):
    id: str
    title: str = ""
    description: str = ""
    category_ids: list[str] = Field(default_factory=list)
    skill_ids: list[str] = Field(default_factory=list)
    tool_ids: list[str] = Field(default_factory=list)
    completion_date: datetime | None = None
    client_rating: float | None = None
    images: list[str] = Field(default_factory=list)
    attachments: list[str] = Field(default_factory=list)


class Rating(CamelModel):
    id: str
    project_id: str = ""
    client_id: str = ""
    rating: float = 0.0
    feedback: str = ""
    categories: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


class TimeSlot(CamelModel):
    day: str
    start: str
    end: str


class Availability(CamelModel):
    hours_per_week: float = 0.0
    timezone: str = "UTC"
    working_hours: list[TimeSlot] = Field(default_factory=list)
    available_from: datetime | None = None
    unavailable_dates: list[datetime] = Field(default_factory=list)


class RateStructure(CamelModel):
    hourly_rate: float = 0.0
    project_minimum: float = 0.0
    currency: str = "USD"
    fixed_price_preference: bool = False
    rush_fee: float = 0.0


class Verification(CamelModel):
    type: VerificationType
    status: VerificationStatus = VerificationStatus.PENDING
    verified_by: str = ""
    verified_at: datetime | None = None
    expires_at: datetime | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class FreelancerProfile(CamelModel):
    """A candidate service provider.

    Numeric fields (success_rate, average_rating, ...) are not range-checked;
    the scorer clamps its own output instead.
    """

    id: str
    user_id: str = ""
    categories: list[str] = Field(default_factory=list)
    skills: list[FreelancerSkill] = Field(default_factory=list)
    tools: list[FreelancerTool] = Field(default_factory=list)
    portfolio: list[PortfolioItem] = Field(default_factory=list)
    ratings: list[Rating] = Field(default_factory=list)
    average_rating: float = 0.0
    total_projects: int = 0
    success_rate: float = 0.0
    response_time: float = 24.0
    availability: Availability = Field(default_factory=Availability)
    rates: RateStructure = Field(default_factory=RateStructure)
    verifications: list[Verification] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    @property
    def is_verified(self) -> bool:
        return any(v.status == VerificationStatus.VERIFIED for v in self.verifications)


# ---------------------------------------------------------------------------
# Matching output
# ---------------------------------------------------------------------------


class SkillMatch(CamelModel):
    skill_id: str
    required: bool = True
    freelancer_level: SkillLevel
    required_level: SkillLevel = SkillLevel.INTERMEDIATE
    experience: float
    verified: bool
    match_score: float


class CategoryMatch(CamelModel):
    category_id: str
    relevance: float
    experience: float
    success_rate: float
    portfolio_items: int


class AIMatchingResult(CamelModel):
    """Score breakdown for one candidate against one set of criteria."""

    freelancer_id: str
    match_score: float = Field(ge=0.0, le=1.0)
    reasoning: str
    skill_matches: list[SkillMatch] = Field(default_factory=list)
    category_matches: list[CategoryMatch] = Field(default_factory=list)
    availability_match: float
    budget_match: float
    timeline_match: float
    risk_factors: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------

Confidence = Literal["low", "medium", "high", "excellent"]
Recommendation = Literal["reject", "consider", "recommend", "highly_recommend"]
CompetitionLevel = Literal["low", "medium", "high"]


class MatchInsights(CamelModel):
    summary: str
    key_strengths: list[str] = Field(default_factory=list)
    potential_concerns: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)


class RankedMatch(CamelModel):
    """Wrapper that pairs an AIMatchingResult with its position and hiring guidance."""

    rank: int = Field(ge=1)
    result: AIMatchingResult
    confidence: Confidence
    recommendation: Recommendation
    competition_level: CompetitionLevel
    estimated_success_rate: float = Field(ge=0.0, le=1.0)
    insights: MatchInsights
