# ABOUTME: Compliance screening of free text against the sensitive-term watch-list.
# ABOUTME: check_compliance() returns found terms, a LOW/MEDIUM/HIGH risk level and replacement advice.

from core.schemas import ComplianceResult, RiskLevel
from priority_advisor.lookups import (
    DEFAULT_SENSITIVE_SUGGESTION,
    SENSITIVE_WORD_SUGGESTIONS,
    SENSITIVE_WORDS,
)

MEDIUM_RISK_MAX_MATCHES = 2


def _risk_level(match_count: int) -> RiskLevel:
    if match_count == 0:
        return RiskLevel.LOW
    if match_count <= MEDIUM_RISK_MAX_MATCHES:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def check_compliance(text: str) -> ComplianceResult:
    """Find watch-list terms contained in text (plain substring match, watch-list order)."""
    found = [word for word in SENSITIVE_WORDS if word in text]
    return ComplianceResult(
        sensitive_words=found,
        risk_level=_risk_level(len(found)),
        suggestions=[
            SENSITIVE_WORD_SUGGESTIONS.get(word, DEFAULT_SENSITIVE_SUGGESTION) for word in found
        ],
        is_compliant=not found,
    )
