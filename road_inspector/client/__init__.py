from road_inspector.client.parsing import interpret_analysis, strip_code_fence
from road_inspector.client.relay import RelayClient, RelayError, StagedImage
from road_inspector.client.render import render
from road_inspector.client.session import InspectionSession, InvalidTransition, SessionState, Theme

__all__ = [
    "interpret_analysis",
    "strip_code_fence",
    "RelayClient",
    "RelayError",
    "StagedImage",
    "render",
    "InspectionSession",
    "InvalidTransition",
    "SessionState",
    "Theme",
]
