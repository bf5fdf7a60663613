# ABOUTME: Advisor execution telemetry: one structured JSON log line per evaluation.
# ABOUTME: Records operation name, latency and confidence; printed to stdout for log shippers.

import json
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass
class TelemetryLogEntry:
    """Structured telemetry entry for one advisor call."""

    timestamp: str
    operation: str
    latency_ms: float
    confidence: float | None
    success: bool

    def to_json(self) -> str:
        return json.dumps(
            {
                "timestamp": self.timestamp,
                "operation": self.operation,
                "latency_ms": round(self.latency_ms, 2),
                "confidence": self.confidence,
                "success": self.success,
            }
        )


def log_evaluation(
    *,
    operation: str,
    latency_ms: float,
    confidence: float | None,
    success: bool,
) -> None:
    """Print a structured JSON log line to stdout for one advisor call."""
    entry = TelemetryLogEntry(
        timestamp=datetime.now(tz=timezone.utc).isoformat(),
        operation=operation,
        latency_ms=latency_ms,
        confidence=confidence,
        success=success,
    )
    print(entry.to_json(), flush=True)
