# ABOUTME: Rule-based task advisor package: priority scoring, scheduling, compliance and reports.
# ABOUTME: Pure functions; api.main exposes them over HTTP.

from priority_advisor.compliance import check_compliance
from priority_advisor.priority import calculate_priority, rank_tasks
from priority_advisor.report import generate_report
from priority_advisor.scheduling import generate_schedule, prayer_weekend_rule

__all__ = [
    "calculate_priority",
    "check_compliance",
    "generate_report",
    "generate_schedule",
    "prayer_weekend_rule",
    "rank_tasks",
]
