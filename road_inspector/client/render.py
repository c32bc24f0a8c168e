"""Markdown rendering of an inspection session.

`render` is a pure function of the session: the same state always gives the
same text. Model output is untrusted, so every field is checked for presence
and type before use and anything unusable is skipped or shown as "Not specified".
"""
from typing import Any

from road_inspector.client.session import InspectionSession, SessionState
from road_inspector.schemas.analysis import POTHOLES_KEYS, SEVERITIES, URGENCIES

NOT_SPECIFIED = "Not specified"
TRY_AGAIN = "[ Try Again ]"

URGENCY_LABELS = dict(zip(URGENCIES, ("Immediate", "Within 24h", "Within a week", "Routine maintenance")))

# minor -> "!", critical -> "!!!!"
SEVERITY_MARKERS = {severity: "!" * rank for rank, severity in enumerate(SEVERITIES, start=1)}


def _text(value: Any, default: str = NOT_SPECIFIED) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _humanize(value: Any) -> str:
    text = _text(value)
    if text == NOT_SPECIFIED:
        return text
    return text.replace("_", " ").capitalize()


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def _mappings(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _yes_no(value: Any) -> str:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, str) and value.strip().lower() in ("yes", "no", "true", "false"):
        return "Yes" if value.strip().lower() in ("yes", "true") else "No"
    return NOT_SPECIFIED


def severity_badge(severity: Any) -> str:
    text = _text(severity)
    marker = SEVERITY_MARKERS.get(text.lower())
    if marker is None:
        return f"`{text}`"
    return f"`{marker} {text.upper()}`"


def urgency_label(urgency: Any) -> str:
    text = _text(urgency)
    return URGENCY_LABELS.get(text, _humanize(text))


def issue_count_label(parsed: dict) -> str:
    """Declared issue_count when it is an integer, else the number of listed issues."""
    declared = parsed.get("issue_count")
    listed = _mappings(parsed.get("issues"))
    if isinstance(declared, int) and not isinstance(declared, bool):
        if "issues" in parsed and declared != len(listed):
            return f"{declared} ({len(listed)} listed)"
        return str(declared)
    return str(len(listed))


def find_potholes(parsed: dict) -> dict | None:
    for key in POTHOLES_KEYS:
        value = parsed.get(key)
        if isinstance(value, dict):
            return value
    return None


def _detail_lines(item: dict) -> list[str]:
    return [
        f"- **Location:** {_text(item.get('location'))}",
        f"- **Size:** {_text(item.get('size_description'))}",
        f"- **Urgency:** {urgency_label(item.get('urgency'))}",
        f"- **Blocking Traffic:** {_yes_no(item.get('blocking_traffic'))}",
        f"- **Safety Risk:** {_text(item.get('safety_risk'))}",
    ]


def render_overall(assessment: Any) -> list[str]:
    if not isinstance(assessment, dict):
        return []
    return [
        "## Overall Road Assessment",
        "",
        f"- **Condition Rating:** {_humanize(assessment.get('condition_rating'))}",
        f"- **Priority Action:** {_humanize(assessment.get('priority_action'))}",
        f"- **Cleanup Time:** {_text(assessment.get('estimated_cleanup_time'))}",
        f"- **Weather Impact:** {_humanize(assessment.get('weather_impact'))}",
        "",
    ]


def render_issue(index: int, issue: dict) -> list[str]:
    title = _humanize(issue.get("type"))
    lines = [
        f"### {index}. {title} {severity_badge(issue.get('severity'))}",
        "",
        f"- **Category:** {_humanize(issue.get('category'))}",
    ]
    lines.extend(_detail_lines(issue))
    notes = _text(issue.get("additional_notes"), default="")
    if notes:
        lines.append(f"- **Notes:** {notes}")
    lines.append("")
    return lines


def render_potholes(summary: dict) -> list[str]:
    potholes = _mappings(summary.get("potholes"))
    count = summary.get("pothole_count")
    if not (isinstance(count, int) and not isinstance(count, bool)):
        count = len(potholes)

    lines = ["## Potholes", "", f"**Pothole Count:** {count}", ""]
    for index, pothole in enumerate(potholes, start=1):
        lines.append(f"### Pothole {index} {severity_badge(pothole.get('severity'))}")
        lines.append("")
        lines.extend(_detail_lines(pothole))
        notes = _text(pothole.get("additional_notes"), default="")
        if notes:
            lines.append(f"- **Notes:** {notes}")
        lines.append("")
    return lines


def render_result(parsed: dict) -> str:
    lines = render_overall(parsed.get("overall_assessment"))

    lines.append(f"**Issues Detected:** {issue_count_label(parsed)}")
    categories = _strings(parsed.get("categories_detected"))
    if categories:
        lines.append(f"**Categories:** {', '.join(_humanize(c) for c in categories)}")
    lines.append("")

    issues = _mappings(parsed.get("issues"))
    if issues:
        lines.extend(["## Issues", ""])
        for index, issue in enumerate(issues, start=1):
            lines.extend(render_issue(index, issue))

    potholes = find_potholes(parsed)
    if potholes is not None:
        lines.extend(render_potholes(potholes))

    recommendations = _strings(parsed.get("recommendations"))
    if recommendations:
        lines.extend(["## Recommendations", ""])
        lines.extend(f"{i}. {rec}" for i, rec in enumerate(recommendations, start=1))
        lines.append("")

    tags = _strings(parsed.get("tags"))
    if tags:
        lines.append("**Tags:** " + " ".join(f"`#{tag}`" for tag in tags))
        lines.append("")

    summary = _text(parsed.get("summary"), default="")
    if summary:
        lines.extend(["## Summary", "", summary, ""])

    detailed = _text(parsed.get("detailed_description"), default="")
    if detailed:
        lines.extend(["## Detailed Analysis", "", detailed, ""])

    return "\n".join(lines).rstrip() + "\n"


def render(session: InspectionSession) -> str:
    state = session.state

    if state is SessionState.IDLE:
        return (
            "## Ready to analyze road conditions\n\n"
            "Upload an image to detect damage, garbage, obstacles & hazards\n"
        )

    if state is SessionState.STAGED:
        image = session.image
        size_kb = len(image.data) / 1024
        return f"**Image staged:** {image.filename} ({size_kb:.1f} KB). Ready to analyze.\n"

    if state is SessionState.ANALYZING:
        return (
            "## AI Analyzing Road Conditions...\n\n"
            "Detecting damage, garbage, obstacles & hazards\n"
        )

    if state is SessionState.FAILED:
        return f"## Analysis Failed\n\n{session.error}\n\n{TRY_AGAIN}\n"

    if session.parsed is not None:
        return render_result(session.parsed)
    return f"## Analysis Results\n\n{session.analysis_text or ''}\n"
