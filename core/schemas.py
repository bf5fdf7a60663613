# ABOUTME: Pydantic models for the advisor contract (priority, scheduling, compliance, report).
# ABOUTME: Used by priority_advisor functions and FastAPI request/response bodies; JSON keys are camelCase.

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UnitFloat = Annotated[float, Field(ge=0.0, le=1.0)]

# About a century; keeps start + estimate inside the datetime range.
MAX_ESTIMATE_DAYS = 36500

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriorityInput(CamelModel):
    """Task attributes the priority evaluator scores."""

    kpi_weights: dict[str, UnitFloat] = Field(
        description="KPI name to weight in [0, 1]; insertion order decides ties.",
    )
    urgency: UnitFloat
    effort: float = Field(ge=0.0, le=100.0, description="Estimated effort, 0-100.")
    risk: UnitFloat
    dependency_criticality: UnitFloat
    task_description: Optional[str] = None
    assignee: Optional[str] = None
    task_id: Optional[str] = None


class PriorityFactors(CamelModel):
    """Weighted contribution of each factor to the final priority."""

    kpi_impact: float
    urgency: float
    effort: float
    risk: float
    dependency: float


class PriorityResult(CamelModel):
    priority: float = Field(ge=0.0, le=1.0)
    reasoning: str
    confidence: float = Field(ge=0.0, le=1.0)
    factors: PriorityFactors


class RankItem(PriorityInput):
    """One task in a batch ranking request."""

    title: Optional[str] = None


class RankedTask(CamelModel):
    task_id: Optional[str] = None
    title: Optional[str] = None
    priority: float
    confidence: float
    reasoning: str


class ScheduleInput(CamelModel):
    """Estimate and constraints the scheduling advisor plans around."""

    estimate: float = Field(
        ge=0.0,
        le=MAX_ESTIMATE_DAYS,
        allow_inf_nan=False,
        description="Duration in days.",
    )
    dependencies: list[str] = Field(default_factory=list)
    hard_deadline: Optional[datetime] = None
    team_calendar: Optional[list[str]] = None
    prayer_weekend_rules: bool = False
    task_id: Optional[str] = None


class ScheduleResult(CamelModel):
    recommended_start: datetime
    recommended_end: datetime
    conflicts: list[str]
    suggestions: list[str]
    confidence: float = Field(ge=0.1, le=1.0)


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class ComplianceRequest(CamelModel):
    text: str
    entity_type: Optional[str] = None


class ComplianceResult(CamelModel):
    sensitive_words: list[str]
    risk_level: RiskLevel
    suggestions: list[str]
    is_compliant: bool


class ReportData(CamelModel):
    """Optional project metrics feeding the report; fields are loosely typed on the wire."""

    completion_rate: Optional[float] = None
    delayed_tasks: Optional[list[Any]] = None
    resource_conflicts: Any = None
    bottlenecks: Any = None


class ReportInput(CamelModel):
    type: Literal["weekly", "monthly"]
    start_date: str
    end_date: str
    data: Optional[ReportData] = None


class ReportContent(CamelModel):
    status: str
    issues: list[str]
    suggestions: list[str]
    risks: list[str]


class Report(CamelModel):
    type: str
    period: str
    generated_at: str
    content: ReportContent


class ApiResponse(CamelModel, Generic[T]):
    """Success envelope returned by every /api/ai endpoint."""

    success: bool = True
    data: T
