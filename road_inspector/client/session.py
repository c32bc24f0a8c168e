"""Per-tab inspection session: one staged image and the outcome of its last analysis.

Transitions:

    IDLE      --stage-->          STAGED
    STAGED    --clear-->          IDLE
    STAGED    --begin_analysis--> ANALYZING
    ANALYZING --resolve-->        RESOLVED
    ANALYZING --fail-->           FAILED
    RESOLVED  --stage-->          STAGED
    FAILED    --retry-->          ANALYZING
    FAILED    --stage-->          STAGED

RESOLVED and FAILED may also be cleared back to IDLE.
"""
import enum
import logging
from dataclasses import dataclass

from road_inspector.client.parsing import interpret_analysis
from road_inspector.client.relay import RelayClient, RelayError, StagedImage

logger = logging.getLogger(__name__)

MSG_UNEXPECTED = "An unexpected error occurred"


class SessionState(str, enum.Enum):
    IDLE = "idle"
    STAGED = "staged"
    ANALYZING = "analyzing"
    RESOLVED = "resolved"
    FAILED = "failed"


class Theme(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"


class InvalidTransition(Exception):
    def __init__(self, state: SessionState, action: str):
        super().__init__(f"cannot {action} while {state.value}")
        self.state = state
        self.action = action


_STAGEABLE = {SessionState.IDLE, SessionState.STAGED, SessionState.RESOLVED, SessionState.FAILED}
_CLEARABLE = {SessionState.STAGED, SessionState.RESOLVED, SessionState.FAILED}


@dataclass
class InspectionSession:
    state: SessionState = SessionState.IDLE
    image: StagedImage | None = None
    note: str | None = None
    complaint_type: str | None = None
    location: str | None = None
    analysis_text: str | None = None
    parsed: dict | None = None
    metadata: dict | None = None
    error: str | None = None
    theme: Theme = Theme.LIGHT
    panel_maximized: bool = False

    def _move(self, new_state: SessionState) -> None:
        logger.debug("Session %s -> %s", self.state.value, new_state.value)
        self.state = new_state

    def _reset_outcome(self) -> None:
        self.analysis_text = None
        self.parsed = None
        self.metadata = None
        self.error = None

    @property
    def can_submit(self) -> bool:
        return self.state is SessionState.STAGED

    @property
    def is_busy(self) -> bool:
        return self.state is SessionState.ANALYZING

    def stage(
        self,
        image: StagedImage,
        note: str | None = None,
        complaint_type: str | None = None,
        location: str | None = None,
    ) -> bool:
        """Stage a new image with its context. Non-image files are refused and leave the session untouched."""
        if not image.is_image:
            logger.info("Refusing to stage %s (%s)", image.filename, image.content_type)
            return False
        if self.state not in _STAGEABLE:
            raise InvalidTransition(self.state, "stage an image")
        self.image = image
        self.note = note
        self.complaint_type = complaint_type
        self.location = location
        self._reset_outcome()
        self._move(SessionState.STAGED)
        return True

    def clear(self) -> None:
        if self.state not in _CLEARABLE:
            raise InvalidTransition(self.state, "clear")
        self.image = None
        self.note = None
        self.complaint_type = None
        self.location = None
        self._reset_outcome()
        self._move(SessionState.IDLE)

    def begin_analysis(self) -> None:
        if self.state is not SessionState.STAGED:
            raise InvalidTransition(self.state, "submit")
        self.error = None
        self._move(SessionState.ANALYZING)

    def retry(self) -> None:
        if self.state is not SessionState.FAILED:
            raise InvalidTransition(self.state, "retry")
        self.error = None
        self._move(SessionState.ANALYZING)

    def resolve(self, body: dict) -> None:
        if self.state is not SessionState.ANALYZING:
            raise InvalidTransition(self.state, "resolve")
        self.analysis_text, self.parsed = interpret_analysis(body.get("analysis"))
        self.metadata = body.get("metadata") if isinstance(body.get("metadata"), dict) else None
        self.error = None
        self._move(SessionState.RESOLVED)

    def fail(self, message: str) -> None:
        if self.state is not SessionState.ANALYZING:
            raise InvalidTransition(self.state, "fail")
        self._reset_outcome()
        self.error = message
        self._move(SessionState.FAILED)

    async def run_analysis(self, relay: RelayClient) -> SessionState:
        """Submit (or retry) the staged image and settle on RESOLVED or FAILED.

        A retry re-sends exactly what was staged.
        """
        if self.state is SessionState.FAILED:
            self.retry()
        else:
            self.begin_analysis()

        try:
            body = await relay.analyze(
                self.image,
                note=self.note,
                complaint_type=self.complaint_type,
                location=self.location,
            )
        except RelayError as e:
            logger.error("Error analyzing image: %s", e.message)
            self.fail(e.message)
        except Exception:
            logger.exception("Unexpected error analyzing image")
            self.fail(MSG_UNEXPECTED)
        else:
            self.resolve(body)
        return self.state

    def toggle_theme(self) -> Theme:
        self.theme = Theme.LIGHT if self.theme is Theme.DARK else Theme.DARK
        return self.theme

    def toggle_panel(self) -> bool:
        self.panel_maximized = not self.panel_maximized
        return self.panel_maximized
