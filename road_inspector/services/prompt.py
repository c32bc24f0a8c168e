"""Road inspection prompt sent alongside every uploaded image.

User-supplied context (complaint type, location, description) is interpolated
verbatim, with no escaping or sanitization between what the reporter typed and
the model instruction. This is an accepted trust boundary.
"""
from road_inspector.schemas.analysis import (
    CONDITION_RATINGS,
    PRIORITY_ACTIONS,
    SEVERITIES,
    URGENCIES,
    WEATHER_IMPACTS,
)

DETECTION_CATEGORIES: tuple[str, ...] = (
    "structural",
    "road_markings",
    "garbage",
    "obstacle",
    "infrastructure",
    "vegetation",
    "safety",
)

ANALYSIS_PROMPT = """\
You are an expert road inspector AI designed to analyze road conditions and public complaints. \
Analyze the provided image comprehensively and detect ANY issues or problems related to road safety, \
cleanliness, and usability.
{contextual_info}
**DETECTION CATEGORIES:**

1. **STRUCTURAL DAMAGE**: Potholes, cracks, surface wear, broken asphalt, uneven surfaces
2. **ROAD MARKINGS**: Faded lines, missing signs, damaged traffic signs, unclear markings
3. **GARBAGE & LITTER**: Trash, plastic bags, bottles, food waste, scattered debris
4. **OBSTACLES & HAZARDS**:
   - Fallen trees, branches, rocks
   - Abandoned vehicles or parts
   - Construction materials left behind
   - Dead animals
   - Large debris blocking traffic
   - Flood water, oil spills
5. **INFRASTRUCTURE ISSUES**:
   - Broken streetlights, damaged guardrails
   - Clogged drains, standing water
   - Damaged manholes, missing covers
   - Broken or tilted poles
6. **VEGETATION ISSUES**: Overgrown grass/weeds, branches blocking view
7. **SAFETY CONCERNS**: Any other hazards affecting pedestrians, cyclists, or vehicles

For each issue detected, provide:
- **type**: Specific issue type (e.g., "plastic bags", "pothole", "fallen branch", "standing water")
- **category**: Main category ({categories})
- **location**: Position in image (left, center, right, near curb, etc.)
- **size_description**: Size estimate in practical terms (small/medium/large or dimensions)
- **severity**: {severities}
- **blocking_traffic**: yes/no - Does it block or impede traffic flow?
- **safety_risk**: Specific safety concerns (vehicle damage, pedestrian hazard, etc.)
- **urgency**: {urgencies}
- **additional_notes**: Any other relevant observations

**OVERALL ASSESSMENT:**
- **condition_rating**: {condition_ratings}
- **priority_action**: {priority_actions}
- **estimated_cleanup_time**: Time estimate for resolution (if applicable)
- **weather_impact**: {weather_impacts}

Return ONLY a JSON object with real analysis data (no placeholders):

{{
  "overall_assessment": {{
    "condition_rating": "fair",
    "priority_action": "scheduled_maintenance",
    "estimated_cleanup_time": "2-4 hours",
    "weather_impact": "none/low/moderate/high"
  }},
  "issue_count": 3,
  "categories_detected": ["garbage", "structural", "obstacle"],
  "issues": [
    {{
      "type": "plastic bags",
      "category": "garbage",
      "location": "center right",
      "size_description": "multiple large bags scattered",
      "severity": "moderate",
      "blocking_traffic": false,
      "safety_risk": "potential flying debris in wind",
      "urgency": "within_24h",
      "additional_notes": "appears to be household waste dumped illegally"
    }}
  ],
  "recommendations": [
    "Schedule garbage collection within 24 hours",
    "Install no-dumping signage",
    "Repair pothole to prevent water accumulation"
  ],
  "tags": ["illegal dumping", "garbage cleanup needed", "moderate priority"],
  "summary": "Multiple issues detected requiring coordinated cleanup and maintenance response.",
  "detailed_description": "### Road Condition: Fair\\n**Immediate Issues:**\\n- Illegal garbage dumping requiring cleanup\\n- Structural damage needs repair\\n\\n**Recommended Actions:**\\n- Priority cleanup within 24 hours\\n- Schedule road maintenance",
  "potholes_summary": {{
    "pothole_count": 1,
    "potholes": [
      {{
        "location": "center left",
        "size_description": "roughly 40cm wide",
        "severity": "moderate",
        "blocking_traffic": false,
        "safety_risk": "tire and rim damage",
        "urgency": "within_week",
        "additional_notes": "edges crumbling"
      }}
    ]
  }}
}}

**POTHOLE SUMMARY:**
Return a separate key called **potholes_summary** with:
- **pothole_count**: total number of potholes detected in the image
- **potholes**: array of pothole details, each with:
  - **location**: where in image
  - **size_description**: size estimate
  - **severity**: {severities}
  - **blocking_traffic**: yes/no
  - **safety_risk**: potential risks
  - **urgency**: {urgencies}
  - **additional_notes**: any extra notes

If no potholes are detected, return pothole_count as 0 and potholes as an empty array.

Respond ONLY with the JSON object - no additional text."""


def build_contextual_info(
    complaint_type: str | None = None,
    location: str | None = None,
    description: str | None = None,
) -> str:
    lines = []
    if complaint_type:
        lines.append(f"User complaint type: {complaint_type}")
    if location:
        lines.append(f"Reported location: {location}")
    if description:
        lines.append(f"User description: {description}")
    if not lines:
        return ""
    return "\n" + "\n".join(lines) + "\n"


def build_analysis_prompt(
    complaint_type: str | None = None,
    location: str | None = None,
    description: str | None = None,
) -> str:
    contextual_info = build_contextual_info(complaint_type, location, description)
    return ANALYSIS_PROMPT.format(
        contextual_info=contextual_info,
        categories=", ".join(DETECTION_CATEGORIES),
        severities=", ".join(SEVERITIES),
        urgencies=", ".join(URGENCIES),
        condition_ratings=", ".join(CONDITION_RATINGS),
        priority_actions=", ".join(PRIORITY_ACTIONS),
        weather_impacts=", ".join(WEATHER_IMPACTS),
    )
