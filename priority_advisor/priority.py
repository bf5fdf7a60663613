# ABOUTME: Rule-based task priority scoring: weighted KPI impact, urgency, effort, risk and dependency.
# ABOUTME: calculate_priority() returns score, reasoning and confidence; rank_tasks() orders a batch.

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Optional

from core.schemas import PriorityFactors, PriorityInput, PriorityResult, RankedTask, RankItem
from priority_advisor.lookups import KPI_KEYWORDS

KPI_WEIGHT = 0.35
URGENCY_WEIGHT = 0.25
EFFORT_WEIGHT = 0.20
RISK_WEIGHT = 0.10
DEPENDENCY_WEIGHT = 0.10

NEUTRAL_KPI_IMPACT = 0.5
MAX_EFFORT = 100

# Reasoning thresholds apply to the weighted contributions, not the raw inputs.
HIGH_URGENCY_THRESHOLD = 0.2
LOW_EFFORT_THRESHOLD = 0.15
LOW_RISK_THRESHOLD = 0.05
CRITICAL_DEPENDENCY_THRESHOLD = 0.08

REASON_SEPARATOR = "；"
REASONING_SUFFIX = "。综合计算得出优先级评分。"

BASE_CONFIDENCE = 0.8


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def _kpi_impact(kpi_weights: Mapping[str, float], task_description: Optional[str]) -> float:
    """Weighted share of each KPI's keywords found in the description; 0.5 when there is nothing to weigh."""
    if not task_description:
        return NEUTRAL_KPI_IMPACT

    total_impact = 0.0
    total_weight = 0.0
    for kpi, weight in kpi_weights.items():
        keywords = KPI_KEYWORDS.get(kpi, ())
        if keywords:
            matches = sum(1 for keyword in keywords if keyword in task_description)
            impact = min(1.0, matches / len(keywords))
        else:
            impact = 0.0
        total_impact += impact * weight
        total_weight += weight

    return total_impact / total_weight if total_weight > 0 else NEUTRAL_KPI_IMPACT


def _format_percent(weight: float) -> str:
    # Half-up on the exact binary value, so 0.125 renders as 13.
    return str(Decimal(weight * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _reasoning(
    factors: PriorityFactors,
    kpi_weights: Mapping[str, float],
    assignee: Optional[str],
) -> str:
    reasons = []

    top_kpi, top_weight = "", 0.0
    for kpi, weight in kpi_weights.items():
        if weight > top_weight:
            top_kpi, top_weight = kpi, weight
    if top_weight > 0:
        reasons.append(f"主要影响{top_kpi}指标（权重{_format_percent(top_weight)}%）")

    if factors.urgency > HIGH_URGENCY_THRESHOLD:
        reasons.append("任务紧急度较高")
    if factors.effort > LOW_EFFORT_THRESHOLD:
        reasons.append("工作量相对较小，适合优先处理")
    if factors.risk < LOW_RISK_THRESHOLD:
        reasons.append("风险较低，执行难度小")
    if factors.dependency > CRITICAL_DEPENDENCY_THRESHOLD:
        reasons.append("依赖关键路径，影响其他任务")
    if assignee:
        reasons.append(f"已分配给{assignee}，可立即执行")

    return REASON_SEPARATOR.join(reasons) + REASONING_SUFFIX


def _confidence(params: PriorityInput) -> float:
    """Confidence grows with how complete the input is."""
    confidence = BASE_CONFIDENCE
    if params.kpi_weights:
        confidence += 0.05
    if params.task_description:
        confidence += 0.05
    if params.assignee:
        confidence += 0.02
    if params.urgency > 0:
        confidence += 0.03
    if params.effort > 0:
        confidence += 0.03
    if params.risk >= 0:
        confidence += 0.02
    return min(1.0, confidence)


def calculate_priority(params: PriorityInput) -> PriorityResult:
    """Score a task in [0, 1] from its KPI weights, urgency, effort, risk and dependency criticality."""
    kpi_impact = _kpi_impact(params.kpi_weights, params.task_description)
    effort_factor = max(0.0, 1 - params.effort / MAX_EFFORT)
    risk_factor = max(0.0, 1 - params.risk)

    factors = PriorityFactors(
        kpi_impact=kpi_impact * KPI_WEIGHT,
        urgency=params.urgency * URGENCY_WEIGHT,
        effort=effort_factor * EFFORT_WEIGHT,
        risk=risk_factor * RISK_WEIGHT,
        dependency=params.dependency_criticality * DEPENDENCY_WEIGHT,
    )
    priority = _clamp(
        factors.kpi_impact + factors.urgency + factors.effort + factors.risk + factors.dependency,
        0.0,
        1.0,
    )

    return PriorityResult(
        priority=priority,
        reasoning=_reasoning(factors, params.kpi_weights, params.assignee),
        confidence=_confidence(params),
        factors=factors,
    )


def rank_tasks(items: Iterable[RankItem]) -> list[RankedTask]:
    """Score every task and return them highest priority first; ties keep input order."""
    ranked = []
    for item in items:
        result = calculate_priority(item)
        ranked.append(
            RankedTask(
                task_id=item.task_id,
                title=item.title,
                priority=result.priority,
                confidence=result.confidence,
                reasoning=result.reasoning,
            )
        )
    ranked.sort(key=lambda task: task.priority, reverse=True)
    return ranked
