from pydantic import BaseModel, ConfigDict

CONDITION_RATINGS = ("excellent", "good", "fair", "poor", "dangerous")
SEVERITIES = ("minor", "moderate", "severe", "critical")
URGENCIES = ("immediate", "within_24h", "within_week", "routine_maintenance")
WEATHER_IMPACTS = ("none", "low", "moderate", "high")
PRIORITY_ACTIONS = ("immediate_attention", "scheduled_maintenance", "monitoring", "no_action_needed")

POTHOLES_KEYS = ("potholes_summary", "potholesSummary")


# Documents the shape the model is asked for. The relay never validates its
# output against these models; the parsed JSON is returned as is.
class _ModelOutput(BaseModel):
    model_config = ConfigDict(extra="allow")


class OverallAssessment(_ModelOutput):
    condition_rating: str | None = None
    priority_action: str | None = None
    estimated_cleanup_time: str | None = None
    weather_impact: str | None = None


class Pothole(_ModelOutput):
    location: str | None = None
    size_description: str | None = None
    severity: str | None = None
    blocking_traffic: bool | None = None
    safety_risk: str | None = None
    urgency: str | None = None
    additional_notes: str | None = None


class Issue(Pothole):
    type: str | None = None
    category: str | None = None


class PotholesSummary(_ModelOutput):
    pothole_count: int | None = None
    potholes: list[Pothole] | None = None


class AnalysisResult(_ModelOutput):
    overall_assessment: OverallAssessment | None = None
    issue_count: int | None = None
    categories_detected: list[str] | None = None
    issues: list[Issue] | None = None
    recommendations: list[str] | None = None
    tags: list[str] | None = None
    summary: str | None = None
    detailed_description: str | None = None
    # also accepted as "potholesSummary"
    potholes_summary: PotholesSummary | None = None


class UserContext(BaseModel):
    complaint_type: str | None = None
    location: str | None = None
    description: str | None = None


class AnalysisMetadata(BaseModel):
    timestamp: str
    image_size: int
    model: str | None = None
    user_context: UserContext


class AnalysisResponse(BaseModel):
    analysis: AnalysisResult | str
    metadata: AnalysisMetadata | None = None
    raw: bool | None = None


class ErrorResponse(BaseModel):
    error: str
