# ABOUTME: Streamlit operator console: Priority, Scheduling, Compliance and Report tabs over /api/ai.
# ABOUTME: API URL configurable via API_URL env (default http://localhost:8000).

import os
from datetime import datetime

import requests
import streamlit as st
from dotenv import load_dotenv

load_dotenv()

API_URL = os.environ.get("API_URL", "http://localhost:8000")

_RISK_COLORS = {"LOW": "green", "MEDIUM": "orange", "HIGH": "red"}


def _parse_kpi_weights(raw: str) -> dict[str, float]:
    """Parse 'KPI=weight' entries separated by commas or newlines into an ordered dict.

    Raises ValueError on a malformed entry or a weight outside [0, 1].
    """
    weights: dict[str, float] = {}
    for chunk in raw.replace("，", ",").replace("\n", ",").split(","):
        entry = chunk.strip()
        if not entry:
            continue
        name, sep, value = entry.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Expected KPI=weight, got '{entry}'")
        try:
            weight = float(value)
        except ValueError:
            raise ValueError(f"Weight for '{name.strip()}' is not a number") from None
        if not 0.0 <= weight <= 1.0:
            raise ValueError(f"Weight for '{name.strip()}' must be between 0 and 1")
        weights[name.strip()] = weight
    return weights


def _format_percent(value: float) -> str:
    return f"{value * 100:.0f}%"


def _risk_badge(level: str) -> str:
    """Colored Streamlit markdown for a LOW/MEDIUM/HIGH risk level."""
    color = _RISK_COLORS.get(level, "gray")
    return f":{color}[{level}]"


def _format_timestamp(raw: str) -> str:
    """Render an ISO timestamp as 'Oct 20, 2026 09:00'; return the input unchanged if unparsable."""
    try:
        dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except (ValueError, TypeError, AttributeError):
        return raw
    return dt.strftime("%b %d, %Y %H:%M")


def _safe_json(response: requests.Response):
    """Parse response body as JSON; return dict or empty dict on failure."""
    try:
        return response.json()
    except ValueError:
        return {}


def _post(path: str, payload: dict):
    """POST to the advisor API; return the `data` payload or None after showing the error."""
    try:
        r = requests.post(f"{API_URL}{path}", json=payload, timeout=10)
    except requests.RequestException as e:
        st.error(f"Could not reach the API: {e}")
        return None
    body = _safe_json(r)
    if r.status_code == 200 and body.get("success"):
        return body.get("data")
    st.error(body.get("message", f"Unexpected error: {r.status_code}"))
    return None


def _render_priority_tab():
    kpi_raw = st.text_area(
        "KPI weights",
        placeholder="ROI=0.6, 续费率=0.4",
        height=80,
    )
    description = st.text_area("Task description", height=80)
    assignee = st.text_input("Assignee")
    urgency = st.slider("Urgency", 0.0, 1.0, 0.5)
    effort = st.slider("Effort", 0, 100, 20)
    risk = st.slider("Risk", 0.0, 1.0, 0.2)
    dependency = st.slider("Dependency criticality", 0.0, 1.0, 0.3)

    if st.button("Calculate priority", key="priority_btn"):
        try:
            kpi_weights = _parse_kpi_weights(kpi_raw)
        except ValueError as e:
            st.error(str(e))
            return
        data = _post(
            "/api/ai/priority",
            {
                "kpiWeights": kpi_weights,
                "urgency": urgency,
                "effort": effort,
                "risk": risk,
                "dependencyCriticality": dependency,
                "taskDescription": description.strip() or None,
                "assignee": assignee.strip() or None,
            },
        )
        if data:
            col_priority, col_confidence = st.columns(2)
            col_priority.metric("Priority", _format_percent(data["priority"]))
            col_confidence.metric("Confidence", _format_percent(data["confidence"]))
            st.write(data["reasoning"])
            st.table(
                [
                    {"factor": name, "contribution": round(value, 3)}
                    for name, value in data["factors"].items()
                ]
            )


def _render_scheduling_tab():
    estimate = st.number_input("Estimate (days)", min_value=0.0, value=3.0, step=0.5)
    deps_raw = st.text_input("Dependencies (comma-separated task ids)")
    use_deadline = st.checkbox("Hard deadline")
    deadline = st.date_input("Deadline", disabled=not use_deadline)
    prayer_rules = st.checkbox("Apply prayer/weekend rules")

    if st.button("Suggest schedule", key="schedule_btn"):
        payload = {
            "estimate": estimate,
            "dependencies": [d.strip() for d in deps_raw.split(",") if d.strip()],
            "prayerWeekendRules": prayer_rules,
        }
        if use_deadline:
            payload["hardDeadline"] = datetime.combine(deadline, datetime.max.time()).isoformat()
        data = _post("/api/ai/scheduling", payload)
        if data:
            st.write(
                f"Start: {_format_timestamp(data['recommendedStart'])}  ·  "
                f"End: {_format_timestamp(data['recommendedEnd'])}"
            )
            st.metric("Confidence", _format_percent(data["confidence"]))
            for conflict in data["conflicts"]:
                st.warning(conflict)
            for suggestion in data["suggestions"]:
                st.markdown(f"- {suggestion}")


def _render_compliance_tab():
    text = st.text_area("Text to check", height=120)
    if st.button("Check compliance", key="compliance_btn"):
        if not text.strip():
            st.error("Please enter some text.")
            return
        data = _post("/api/ai/compliance", {"text": text})
        if data:
            st.markdown(f"Risk level: {_risk_badge(data['riskLevel'])}")
            if data["isCompliant"]:
                st.success("No sensitive terms found.")
            for word, suggestion in zip(data["sensitiveWords"], data["suggestions"]):
                st.markdown(f"- **{word}**: {suggestion}")


def _render_report_tab():
    report_type = st.selectbox("Type", ["weekly", "monthly"])
    col_start, col_end = st.columns(2)
    start_date = col_start.date_input("Start date")
    end_date = col_end.date_input("End date")
    completion = st.slider("Completion rate", 0.0, 1.0, 0.7)
    include_data = st.checkbox("Include completion rate", value=True)

    if st.button("Generate report", key="report_btn"):
        payload = {
            "type": report_type,
            "startDate": start_date.isoformat(),
            "endDate": end_date.isoformat(),
        }
        if include_data:
            payload["data"] = {"completionRate": completion}
        data = _post("/api/ai/report", payload)
        if data:
            content = data["content"]
            st.subheader(data["period"])
            st.caption(f"Generated {_format_timestamp(data['generatedAt'])}")
            st.write(content["status"])
            for title, items in (
                ("Issues", content["issues"]),
                ("Suggestions", content["suggestions"]),
                ("Risks", content["risks"]),
            ):
                st.caption(f"**{title}**")
                for item in items:
                    st.markdown(f"- {item}")


def main():
    st.title("AI Priority Advisor")
    tab_priority, tab_schedule, tab_compliance, tab_report = st.tabs(
        ["Priority", "Scheduling", "Compliance", "Report"]
    )
    with tab_priority:
        _render_priority_tab()
    with tab_schedule:
        _render_scheduling_tab()
    with tab_compliance:
        _render_compliance_tab()
    with tab_report:
        _render_report_tab()


if __name__ == "__main__":
    main()
