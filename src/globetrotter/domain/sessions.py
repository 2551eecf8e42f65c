"""Domain models for game sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

QUESTIONS_PER_SESSION = 5
OPTIONS_PER_QUESTION = 4

STATUS_CREATED = "CREATED"
STATUS_IN_PROGRESS = "IN_PROGRESS"
STATUS_COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted game session and its running score."""

    id: UUID
    user_id: UUID
    total_questions: int
    total_answered: int
    total_correct: int
    total_incorrect: int
    created_at: datetime

    @property
    def status(self) -> str:
        if self.total_answered == 0:
            return STATUS_CREATED
        if self.total_answered < self.total_questions:
            return STATUS_IN_PROGRESS
        return STATUS_COMPLETED


@dataclass(frozen=True)
class Unanswered:
    """State of a question still waiting for a selection."""


@dataclass(frozen=True)
class Answered:
    """State of a question after its single accepted answer."""

    selected_destination_id: int
    correct: bool


QuestionState = Unanswered | Answered


@dataclass(frozen=True)
class NewSessionQuestion:
    """A question drafted for a session before it is persisted."""

    position: int
    clue: str
    option_destination_ids: tuple[int, ...]
    correct_destination_id: int


@dataclass(frozen=True)
class SessionQuestion:
    """Represents a persisted question of a session."""

    id: UUID
    session_id: UUID
    position: int
    clue: str
    option_destination_ids: tuple[int, ...]
    correct_destination_id: int
    state: QuestionState

    @property
    def is_answered(self) -> bool:
        return isinstance(self.state, Answered)


@dataclass(frozen=True)
class OptionView:
    """A selectable option as shown to the player."""

    destination_id: int
    label: str


@dataclass(frozen=True)
class NextQuestion:
    """The next unanswered question, without its answer."""

    session_id: UUID
    question_id: UUID
    position: int
    total_questions: int
    clue: str
    options: tuple[OptionView, ...]
    has_next: bool


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of a submitted answer."""

    correct: bool
    correct_destination_id: int
    correct_city: str
    correct_country: str
    fun_fact: str | None = None
    trivia: str | None = None


@dataclass(frozen=True)
class QuestionView:
    """A question as reported in the session result.

    ``correct_destination_id`` and ``selected_destination_id`` stay unset
    until the question is answered.
    """

    question_id: UUID
    position: int
    clue: str
    option_destination_ids: tuple[int, ...]
    answered: bool
    correct_destination_id: int | None
    selected_destination_id: int | None
    correct: bool | None


@dataclass(frozen=True)
class SessionResult:
    """Full roll-up of a session."""

    session_id: UUID
    status: str
    total_questions: int
    total_answered: int
    total_correct: int
    total_incorrect: int
    questions: tuple[QuestionView, ...]


@dataclass(frozen=True)
class SessionSummary:
    """Compact, shareable view of a session."""

    session_id: UUID
    username: str
    total_questions: int
    total_answered: int
    total_correct: int
    created_at: datetime
    image_url: str
