# ABOUTME: Pytest tests for calculate_priority and rank_tasks.
# ABOUTME: Covers KPI keyword impact, weighted factors, reasoning clauses, confidence and input validation.

import pytest
from pydantic import ValidationError

from core.schemas import PriorityInput, RankItem
from priority_advisor.priority import (
    REASONING_SUFFIX,
    calculate_priority,
    rank_tasks,
)


def _input(**overrides) -> PriorityInput:
    params = {
        "kpi_weights": {},
        "urgency": 0.0,
        "effort": 0.0,
        "risk": 0.0,
        "dependency_criticality": 0.0,
    }
    params.update(overrides)
    return PriorityInput(**params)


def test_single_roi_keyword_gives_one_sixth_impact():
    """ROI has six keywords; one match in the description is an impact of 1/6."""
    result = calculate_priority(
        _input(kpi_weights={"ROI": 1.0}, task_description="本季度提升利润")
    )
    assert result.factors.kpi_impact == pytest.approx(0.35 / 6)
    assert result.factors.effort == pytest.approx(0.2)
    assert result.factors.risk == pytest.approx(0.1)
    assert result.priority == pytest.approx(0.35 / 6 + 0.2 + 0.1)


def test_missing_description_uses_neutral_impact():
    result = calculate_priority(_input(kpi_weights={"ROI": 1.0, "续费率": 0.3}))
    assert result.factors.kpi_impact == pytest.approx(0.5 * 0.35)


def test_empty_kpi_weights_uses_neutral_impact():
    result = calculate_priority(_input(task_description="提升利润和收入"))
    assert result.factors.kpi_impact == pytest.approx(0.5 * 0.35)


def test_all_zero_weights_uses_neutral_impact():
    result = calculate_priority(_input(kpi_weights={"ROI": 0.0}, task_description="利润"))
    assert result.factors.kpi_impact == pytest.approx(0.5 * 0.35)


def test_unknown_kpi_counts_weight_but_adds_no_impact():
    only_unknown = calculate_priority(
        _input(kpi_weights={"NPS": 0.5}, task_description="利润")
    )
    assert only_unknown.factors.kpi_impact == 0.0

    mixed = calculate_priority(
        _input(kpi_weights={"NPS": 0.5, "ROI": 0.5}, task_description="利润收入")
    )
    # ROI matches 2/6, diluted by the unknown KPI's equal weight.
    assert mixed.factors.kpi_impact == pytest.approx((1 / 3) * 0.5 * 0.35)


def test_keyword_match_is_case_sensitive_substring():
    assert calculate_priority(
        _input(kpi_weights={"roi": 1.0}, task_description="利润")
    ).factors.kpi_impact == 0.0
    # Substring inside a longer word still matches.
    assert calculate_priority(
        _input(kpi_weights={"ROI": 1.0}, task_description="高利润率")
    ).factors.kpi_impact == pytest.approx(0.35 / 6)


def test_all_factors_maxed_clamps_priority_to_one():
    result = calculate_priority(
        _input(
            kpi_weights={"ROI": 1.0},
            task_description="收入成本利润投资回报效益",
            urgency=1.0,
            dependency_criticality=1.0,
        )
    )
    assert result.factors.kpi_impact == pytest.approx(0.35)
    assert result.priority == pytest.approx(1.0)
    assert result.priority <= 1.0


def test_reasoning_names_top_kpi_and_low_effort():
    result = calculate_priority(
        _input(kpi_weights={"ROI": 1.0}, task_description="利润")
    )
    assert result.reasoning == (
        "主要影响ROI指标（权重100%）；工作量相对较小，适合优先处理" + REASONING_SUFFIX
    )


def test_reasoning_tie_goes_to_first_kpi():
    result = calculate_priority(_input(kpi_weights={"续费率": 0.5, "ROI": 0.5}))
    assert "主要影响续费率指标（权重50%）" in result.reasoning
    assert "ROI" not in result.reasoning


def test_reasoning_percent_rounds_half_up():
    result = calculate_priority(_input(kpi_weights={"ROI": 0.125}))
    assert "（权重13%）" in result.reasoning


def test_reasoning_all_clauses():
    result = calculate_priority(
        _input(
            kpi_weights={"ROI": 0.8},
            urgency=0.9,
            effort=10,
            risk=0.7,
            dependency_criticality=0.9,
            assignee="张三",
        )
    )
    assert result.reasoning.split("；") == [
        "主要影响ROI指标（权重80%）",
        "任务紧急度较高",
        "工作量相对较小，适合优先处理",
        "风险较低，执行难度小",
        "依赖关键路径，影响其他任务",
        "已分配给张三，可立即执行" + REASONING_SUFFIX,
    ]


def test_reasoning_with_no_clauses_is_only_suffix():
    result = calculate_priority(_input(effort=100))
    assert result.reasoning == REASONING_SUFFIX


def test_confidence_minimal_input():
    """Only risk >= 0 contributes: 0.8 + 0.02."""
    assert calculate_priority(_input()).confidence == pytest.approx(0.82)


def test_confidence_full_input_caps_at_one():
    result = calculate_priority(
        _input(
            kpi_weights={"ROI": 1.0},
            task_description="利润",
            assignee="李四",
            urgency=0.5,
            effort=20,
            risk=0.1,
        )
    )
    assert result.confidence == pytest.approx(1.0)
    assert result.confidence <= 1.0


def test_same_input_gives_same_result():
    params = _input(kpi_weights={"教材完成度": 0.7}, task_description="完成教材内容", urgency=0.4)
    assert calculate_priority(params) == calculate_priority(params)


def test_camel_case_payload_and_dump():
    params = PriorityInput.model_validate(
        {
            "kpiWeights": {"ROI": 0.6},
            "urgency": 0.3,
            "effort": 40,
            "risk": 0.2,
            "dependencyCriticality": 0.5,
            "taskDescription": "投资回报",
        }
    )
    dumped = calculate_priority(params).model_dump(by_alias=True)
    assert set(dumped["factors"]) == {"kpiImpact", "urgency", "effort", "risk", "dependency"}
    assert 0.0 <= dumped["priority"] <= 1.0


@pytest.mark.parametrize(
    "field, value",
    [
        ("urgency", -0.1),
        ("urgency", 1.5),
        ("risk", 2.0),
        ("dependency_criticality", -1.0),
        ("effort", 150),
        ("effort", -5),
    ],
)
def test_out_of_range_inputs_are_rejected(field, value):
    with pytest.raises(ValidationError):
        _input(**{field: value})


def test_out_of_range_kpi_weight_is_rejected():
    with pytest.raises(ValidationError):
        _input(kpi_weights={"ROI": 1.2})


def test_rank_tasks_orders_by_priority_and_keeps_ties_stable():
    items = [
        RankItem(task_id="low", kpi_weights={}, urgency=0.0, effort=100, risk=1.0, dependency_criticality=0.0),
        RankItem(task_id="tie-a", title="A", kpi_weights={}, urgency=0.5, effort=50, risk=0.5, dependency_criticality=0.5),
        RankItem(task_id="high", kpi_weights={}, urgency=1.0, effort=0, risk=0.0, dependency_criticality=1.0),
        RankItem(task_id="tie-b", title="B", kpi_weights={}, urgency=0.5, effort=50, risk=0.5, dependency_criticality=0.5),
    ]
    ranked = rank_tasks(items)
    assert [t.task_id for t in ranked] == ["high", "tie-a", "tie-b", "low"]
    assert ranked[1].title == "A"
    assert ranked[0].priority >= ranked[-1].priority


def test_rank_tasks_empty():
    assert rank_tasks([]) == []
