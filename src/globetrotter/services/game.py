"""Game session engine: creation, question flow, answers, and results."""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from globetrotter.adapters.pexels_client import ImageClient
from globetrotter.domain.destinations import Destination
from globetrotter.domain.errors import (
    AlreadyAnsweredError,
    InsufficientCatalogSizeError,
    InvalidOptionError,
    NoQuestionsRemainingError,
    QuestionNotFoundError,
    SessionMismatchError,
    SessionNotFoundError,
    StoreUnavailableError,
    UserNotFoundError,
)
from globetrotter.domain.sessions import (
    QUESTIONS_PER_SESSION,
    Answered,
    AnswerResult,
    NewSessionQuestion,
    NextQuestion,
    OptionView,
    QuestionView,
    SessionQuestion,
    SessionRecord,
    SessionResult,
    SessionSummary,
)
from globetrotter.services.catalog import DestinationCatalog
from globetrotter.services.options import OptionGenerator
from globetrotter.services.randomness import SharedRandom
from globetrotter.services.users import UserRepository

_logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for game sessions and their questions."""

    def create_session(
        self,
        user_id: UUID,
        total_questions: int,
        questions: list[NewSessionQuestion],
    ) -> SessionRecord:
        """Atomically create a session with all of its questions."""

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""

    def get_question(self, question_id: UUID) -> SessionQuestion | None:
        """Return a question by id, if present."""

    def get_next_unanswered(self, session_id: UUID) -> SessionQuestion | None:
        """Return the lowest-position unanswered question of a session."""

    def count_unanswered(self, session_id: UUID) -> int:
        """Return how many questions of a session are unanswered."""

    def record_answer(
        self,
        session_id: UUID,
        question_id: UUID,
        selected_destination_id: int,
        correct: bool,
    ) -> bool:
        """Mark a question answered and adjust session counters as one unit.

        Returns False when the question was already answered, in which case
        nothing is written.
        """

    def list_questions(self, session_id: UUID) -> list[SessionQuestion]:
        """Return every question of a session ordered by position."""


@dataclass
class GameService:
    """Runs game sessions over the destination catalog."""

    catalog: DestinationCatalog
    user_repository: UserRepository
    session_repository: SessionRepository
    image_client: ImageClient
    rng: SharedRandom
    questions_per_session: int = QUESTIONS_PER_SESSION
    option_generator: OptionGenerator = field(init=False)

    def __post_init__(self) -> None:
        self.option_generator = OptionGenerator(self.rng)

    def create_session(self, username: str) -> UUID:
        """Create a session for a user and return its id."""
        user = self.user_repository.get_by_username(username.strip())
        if user is None:
            raise UserNotFoundError(f"User not found: {username}")
        if len(self.catalog) < self.questions_per_session:
            raise InsufficientCatalogSizeError(
                f"Need {self.questions_per_session} destinations, "
                f"catalog has {len(self.catalog)}"
            )

        picks = self.rng.shuffled(self.catalog.destinations)
        questions = [
            NewSessionQuestion(
                position=position,
                clue=self._pick_clue(destination),
                option_destination_ids=self.option_generator.generate(
                    destination, self.catalog
                ),
                correct_destination_id=destination.id,
            )
            for position, destination in enumerate(
                picks[: self.questions_per_session], start=1
            )
        ]
        session = self.session_repository.create_session(
            user_id=user.id,
            total_questions=self.questions_per_session,
            questions=questions,
        )
        _logger.info("Created game session %s for user %s", session.id, user.id)
        return session.id

    def next_question(self, session_id: UUID) -> NextQuestion:
        """Return the next unanswered question with its answer withheld."""
        session = self._require_session(session_id)
        question = self.session_repository.get_next_unanswered(session_id)
        if question is None:
            raise NoQuestionsRemainingError()
        # Reports whether a question remains after this one is answered.
        has_next = self.session_repository.count_unanswered(session_id) > 1
        return NextQuestion(
            session_id=session_id,
            question_id=question.id,
            position=question.position,
            total_questions=session.total_questions,
            clue=question.clue,
            options=self._option_views(question),
            has_next=has_next,
        )

    def submit_answer(
        self, session_id: UUID, question_id: UUID, selected_destination_id: int
    ) -> AnswerResult:
        """Validate and record the single answer to a question."""
        question = self.session_repository.get_question(question_id)
        if question is None:
            raise QuestionNotFoundError()
        if question.session_id != session_id:
            raise SessionMismatchError()
        if question.is_answered:
            raise AlreadyAnsweredError()
        if selected_destination_id not in question.option_destination_ids:
            raise InvalidOptionError()

        destination = self.catalog.get(question.correct_destination_id)
        if destination is None:
            raise StoreUnavailableError(
                f"Destination {question.correct_destination_id} is not in the catalog"
            )
        correct = selected_destination_id == question.correct_destination_id
        applied = self.session_repository.record_answer(
            session_id=session_id,
            question_id=question_id,
            selected_destination_id=selected_destination_id,
            correct=correct,
        )
        if not applied:
            raise AlreadyAnsweredError()
        _logger.info(
            "Answer recorded: session=%s question=%s correct=%s",
            session_id,
            question_id,
            correct,
        )

        fun_fact = None
        trivia = None
        if correct and destination.fun_facts:
            fun_fact = self.rng.choice(destination.fun_facts)
        elif not correct and destination.trivia:
            trivia = self.rng.choice(destination.trivia)
        return AnswerResult(
            correct=correct,
            correct_destination_id=destination.id,
            correct_city=destination.city,
            correct_country=destination.country,
            fun_fact=fun_fact,
            trivia=trivia,
        )

    def get_result(self, session_id: UUID) -> SessionResult:
        """Return counts and every question, hiding unanswered answers."""
        session = self._require_session(session_id)
        questions = self.session_repository.list_questions(session_id)
        return SessionResult(
            session_id=session.id,
            status=session.status,
            total_questions=session.total_questions,
            total_answered=session.total_answered,
            total_correct=session.total_correct,
            total_incorrect=session.total_incorrect,
            questions=tuple(_question_view(question) for question in questions),
        )

    async def get_summary(self, session_id: UUID) -> SessionSummary:
        """Return the shareable summary of a session."""
        session = self._require_session(session_id)
        user = self.user_repository.get_by_id(session.user_id)
        if user is None:
            raise UserNotFoundError(f"Owner of game {session_id} not found")
        image_url = await self.image_client.fetch_display_image()
        return SessionSummary(
            session_id=session.id,
            username=user.username,
            total_questions=session.total_questions,
            total_answered=session.total_answered,
            total_correct=session.total_correct,
            created_at=session.created_at,
            image_url=image_url,
        )

    def random_destination(self) -> Destination:
        """Return a uniformly random destination for the home screen teaser."""
        if not len(self.catalog):
            raise InsufficientCatalogSizeError("Destination catalog is empty")
        return self.rng.choice(self.catalog.destinations)

    def _require_session(self, session_id: UUID) -> SessionRecord:
        session = self.session_repository.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(f"Game not found: {session_id}")
        return session

    def _pick_clue(self, destination: Destination) -> str:
        if destination.clues:
            return self.rng.choice(destination.clues)
        return f"Where is {destination.city} located?"

    def _option_views(self, question: SessionQuestion) -> tuple[OptionView, ...]:
        views = []
        for destination_id in question.option_destination_ids:
            destination = self.catalog.get(destination_id)
            if destination is None:
                continue
            views.append(
                OptionView(destination_id=destination_id, label=destination.label)
            )
        return tuple(views)


def _question_view(question: SessionQuestion) -> QuestionView:
    state = question.state
    if isinstance(state, Answered):
        return QuestionView(
            question_id=question.id,
            position=question.position,
            clue=question.clue,
            option_destination_ids=question.option_destination_ids,
            answered=True,
            correct_destination_id=question.correct_destination_id,
            selected_destination_id=state.selected_destination_id,
            correct=state.correct,
        )
    return QuestionView(
        question_id=question.id,
        position=question.position,
        clue=question.clue,
        option_destination_ids=question.option_destination_ids,
        answered=False,
        correct_destination_id=None,
        selected_destination_id=None,
        correct=None,
    )
