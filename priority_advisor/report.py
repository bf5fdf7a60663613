# ABOUTME: Weekly/monthly progress report assembled from templates and optional project metrics.
# ABOUTME: generate_report() fills status, issues, suggestions and risks; generatedAt is UTC now in millisecond ISO form.

from datetime import datetime, timezone
from typing import Any, Optional

from core.schemas import Report, ReportContent, ReportData, ReportInput

GOOD_COMPLETION_RATE = 0.8
NORMAL_COMPLETION_RATE = 0.6

DEFAULT_STATUS = "所有项目按计划进行"
GOOD_STATUS = "项目进展良好，大部分任务按计划完成"
NORMAL_STATUS = "项目进展正常，需要关注关键路径任务"
SLOW_STATUS = "项目进展较慢，需要加强资源投入和管理"

PLACEHOLDER_ISSUES = ("任务A进度延迟2天", "资源分配需要优化")
RESOURCE_CONFLICT_ISSUE = "存在资源分配冲突"

BASE_SUGGESTIONS = ("增加人力资源投入", "调整任务优先级", "加强团队沟通协调")
BOTTLENECK_SUGGESTION = "重点关注瓶颈任务，优先解决"

STANDARD_RISKS = (
    "技术风险: 新框架学习曲线",
    "时间风险: 截止日期紧张",
    "资源风险: 关键人员依赖",
)


def _is_set(value: Any) -> bool:
    """Loose presence check for metric fields: empty lists and dicts count as set, 0/""/False do not."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and value == 0:
        return False
    return value != ""


def _status(data: Optional[ReportData]) -> str:
    if data is None:
        return DEFAULT_STATUS
    completion = data.completion_rate or 0
    if completion >= GOOD_COMPLETION_RATE:
        return GOOD_STATUS
    if completion >= NORMAL_COMPLETION_RATE:
        return NORMAL_STATUS
    return SLOW_STATUS


def _issues(data: Optional[ReportData]) -> list[str]:
    if data is None:
        return list(PLACEHOLDER_ISSUES)
    issues = []
    if data.delayed_tasks is not None:
        issues.append(f"{len(data.delayed_tasks)}个任务出现延迟")
    if _is_set(data.resource_conflicts):
        issues.append(RESOURCE_CONFLICT_ISSUE)
    return issues


def _suggestions(data: Optional[ReportData]) -> list[str]:
    suggestions = list(BASE_SUGGESTIONS)
    if data is not None and _is_set(data.bottlenecks):
        suggestions.append(BOTTLENECK_SUGGESTION)
    return suggestions


def _iso_utc(moment: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix, e.g. 2026-10-19T10:00:00.000Z."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_report(params: ReportInput, now: Optional[datetime] = None) -> Report:
    """Build the report for params.type over start_date..end_date."""
    if now is None:
        now = datetime.now(timezone.utc)
    data = params.data
    return Report(
        type=params.type,
        period=f"{params.start_date} - {params.end_date}",
        generated_at=_iso_utc(now),
        content=ReportContent(
            status=_status(data),
            issues=_issues(data),
            suggestions=_suggestions(data),
            risks=list(STANDARD_RISKS),
        ),
    )
