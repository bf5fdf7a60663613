# ABOUTME: Scheduling advisor: recommends a start/end window, flags conflicts and adds planning tips.
# ABOUTME: Blocked days come from a pluggable calendar rule; prayer_weekend_rule is the default one.

import calendar
import math
from datetime import datetime, timedelta
from typing import Callable, Optional

from core.schemas import ScheduleInput, ScheduleResult

# A calendar rule maps a candidate start to the number of days it must move forward (0 = allowed).
CalendarRule = Callable[[datetime], int]

START_OFFSET = timedelta(days=1)
WORKDAY_START_HOUR = 9
MAX_SPAN_DAYS = 14
MILESTONE_ESTIMATE_DAYS = 5

FRIDAY_CUTOFF_HOUR = 12

GENERAL_SUGGESTIONS = (
    "建议在工作日上午9-11点进行重要任务",
    "预留15-20%的缓冲时间应对突发情况",
    "定期检查进度，及时调整计划",
)
PRAYER_SUGGESTION = "避免在祷告时间安排重要会议"
MILESTONE_SUGGESTION = "建议设置里程碑节点，分阶段验收"
CONFLICT_SUGGESTION = "建议优先解决排期冲突，确保项目顺利进行"

DEADLINE_CONFLICT = "建议结束时间超过硬截止时间"
SPAN_CONFLICT = "工期过长，建议拆分任务"


def prayer_weekend_rule(moment: datetime) -> int:
    """Friday afternoon moves to Monday, Sunday moves to Monday."""
    weekday = moment.weekday()
    if weekday == calendar.FRIDAY and moment.hour >= FRIDAY_CUTOFF_HOUR:
        return 3
    if weekday == calendar.SUNDAY:
        return 1
    return 0


def _apply_calendar_rule(start: datetime, rule: CalendarRule) -> datetime:
    shift = rule(start)
    if shift <= 0:
        return start
    shifted = start + timedelta(days=shift)
    return shifted.replace(hour=WORKDAY_START_HOUR, minute=0, second=0, microsecond=0)


def _check_conflicts(params: ScheduleInput, start: datetime, end: datetime) -> list[str]:
    conflicts = []

    deadline = params.hard_deadline
    if deadline is not None:
        if deadline.tzinfo is None and end.tzinfo is not None:
            deadline = deadline.replace(tzinfo=end.tzinfo)
        if end > deadline:
            conflicts.append(DEADLINE_CONFLICT)

    if params.dependencies:
        conflicts.append(f"存在{len(params.dependencies)}个依赖任务需要完成")

    span_days = math.ceil((end - start) / timedelta(days=1))
    if span_days > MAX_SPAN_DAYS:
        conflicts.append(SPAN_CONFLICT)

    return conflicts


def _suggestions(params: ScheduleInput, conflicts: list[str]) -> list[str]:
    suggestions = list(GENERAL_SUGGESTIONS)
    if params.prayer_weekend_rules:
        suggestions.append(PRAYER_SUGGESTION)
    if params.estimate > MILESTONE_ESTIMATE_DAYS:
        suggestions.append(MILESTONE_SUGGESTION)
    if conflicts:
        suggestions.append(CONFLICT_SUGGESTION)
    return suggestions


def _confidence(params: ScheduleInput, conflicts: list[str]) -> float:
    confidence = 0.7
    if params.estimate > 0:
        confidence += 0.1
    if params.hard_deadline is not None:
        confidence += 0.05
    if not params.dependencies:
        confidence += 0.1
    confidence -= len(conflicts) * 0.05
    return max(0.1, min(1.0, confidence))


def generate_schedule(
    params: ScheduleInput,
    now: Optional[datetime] = None,
    calendar_rule: Optional[CalendarRule] = None,
) -> ScheduleResult:
    """Recommend a start tomorrow (shifted past blocked days when enabled) and an end `estimate` days later.

    `now` defaults to the current local time; a naive `now` is read as local time.
    `calendar_rule` replaces prayer_weekend_rule and only applies when
    params.prayer_weekend_rules is set.
    """
    if now is None:
        now = datetime.now()
    if now.tzinfo is None:
        now = now.astimezone()

    start = now + START_OFFSET
    if params.prayer_weekend_rules:
        start = _apply_calendar_rule(start, calendar_rule or prayer_weekend_rule)
    end = start + timedelta(days=params.estimate)

    conflicts = _check_conflicts(params, start, end)
    return ScheduleResult(
        recommended_start=start,
        recommended_end=end,
        conflicts=conflicts,
        suggestions=_suggestions(params, conflicts),
        confidence=_confidence(params, conflicts),
    )
