"""Shared test fixtures."""

import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from globetrotter.adapters.json_catalog_loader import (
    SEED_DATASET_PATH,
    JsonCatalogLoader,
)
from globetrotter.adapters.pexels_client import (
    DEFAULT_FALLBACK_IMAGE_URL,
    ImageClient,
)
from globetrotter.config import Settings
from globetrotter.containers import AppContainer
from globetrotter.domain.destinations import Destination
from globetrotter.domain.errors import StoreUnavailableError, UsernameTakenError
from globetrotter.domain.models import UserRecord
from globetrotter.domain.sessions import (
    Answered,
    NewSessionQuestion,
    SessionQuestion,
    SessionRecord,
    Unanswered,
)
from globetrotter.services.catalog import DestinationCatalog
from globetrotter.services.game import GameService, SessionRepository
from globetrotter.services.randomness import SharedRandom
from globetrotter.services.users import UserRepository, UserService


def make_destination(  # noqa: PLR0913
    destination_id: int,
    city: str,
    country: str,
    clues: tuple[str, ...] = ("A clue",),
    fun_facts: tuple[str, ...] = ("A fun fact",),
    trivia: tuple[str, ...] = ("Some trivia",),
) -> Destination:
    return Destination(
        id=destination_id,
        city=city,
        country=country,
        clues=clues,
        fun_facts=fun_facts,
        trivia=trivia,
    )


def make_catalog(count: int) -> DestinationCatalog:
    return DestinationCatalog.from_destinations(
        [
            make_destination(index, f"City {index}", f"Country {index}")
            for index in range(1, count + 1)
        ]
    )


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)

    def get_by_username(self, username: str) -> UserRecord | None:
        return self.users.get(username)

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        for user in self.users.values():
            if user.id == user_id:
                return user
        return None

    def create_user(self, username: str) -> UserRecord:
        if username in self.users:
            raise UsernameTakenError()
        user = UserRecord(id=uuid4(), username=username, created_at=datetime.now(UTC))
        self.users[username] = user
        return user


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository applying answers under a lock."""

    sessions: dict[UUID, SessionRecord] = field(default_factory=dict)
    questions: dict[UUID, SessionQuestion] = field(default_factory=dict)
    fail_on_create: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def create_session(
        self,
        user_id: UUID,
        total_questions: int,
        questions: list[NewSessionQuestion],
    ) -> SessionRecord:
        if self.fail_on_create:
            raise StoreUnavailableError("Failed to create game session")
        session = SessionRecord(
            id=uuid4(),
            user_id=user_id,
            total_questions=total_questions,
            total_answered=0,
            total_correct=0,
            total_incorrect=0,
            created_at=datetime.now(UTC),
        )
        rows = [
            SessionQuestion(
                id=uuid4(),
                session_id=session.id,
                position=question.position,
                clue=question.clue,
                option_destination_ids=question.option_destination_ids,
                correct_destination_id=question.correct_destination_id,
                state=Unanswered(),
            )
            for question in questions
        ]
        with self._lock:
            self.sessions[session.id] = session
            for row in rows:
                self.questions[row.id] = row
        return session

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        return self.sessions.get(session_id)

    def get_question(self, question_id: UUID) -> SessionQuestion | None:
        return self.questions.get(question_id)

    def get_next_unanswered(self, session_id: UUID) -> SessionQuestion | None:
        for question in self.list_questions(session_id):
            if not question.is_answered:
                return question
        return None

    def count_unanswered(self, session_id: UUID) -> int:
        return len([q for q in self.list_questions(session_id) if not q.is_answered])

    def record_answer(
        self,
        session_id: UUID,
        question_id: UUID,
        selected_destination_id: int,
        correct: bool,
    ) -> bool:
        with self._lock:
            question = self.questions.get(question_id)
            if (
                question is None
                or question.session_id != session_id
                or question.is_answered
            ):
                return False
            self.questions[question_id] = replace(
                question,
                state=Answered(
                    selected_destination_id=selected_destination_id, correct=correct
                ),
            )
            session = self.sessions[session_id]
            self.sessions[session_id] = replace(
                session,
                total_answered=session.total_answered + 1,
                total_correct=session.total_correct + int(correct),
                total_incorrect=session.total_incorrect + int(not correct),
            )
            return True

    def list_questions(self, session_id: UUID) -> list[SessionQuestion]:
        return sorted(
            (q for q in self.questions.values() if q.session_id == session_id),
            key=lambda q: q.position,
        )


@dataclass
class FakeImageClient(ImageClient):
    """Image client returning a fixed URL."""

    url: str = DEFAULT_FALLBACK_IMAGE_URL
    calls: int = 0

    async def fetch_display_image(self) -> str:
        self.calls += 1
        return self.url


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        catalog_path=SEED_DATASET_PATH,
        random_seed=7,
    )


@pytest.fixture
def catalog() -> DestinationCatalog:
    return DestinationCatalog.from_destinations(JsonCatalogLoader().load_all())


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture
def image_client() -> FakeImageClient:
    return FakeImageClient(url="https://images.test/travel.jpg")


@pytest.fixture
def game_service(
    catalog: DestinationCatalog,
    user_repository: InMemoryUserRepository,
    session_repository: InMemorySessionRepository,
    image_client: FakeImageClient,
) -> GameService:
    return GameService(
        catalog=catalog,
        user_repository=user_repository,
        session_repository=session_repository,
        image_client=image_client,
        rng=SharedRandom.create(seed=42),
    )


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    image_client: FakeImageClient,
    game_service: GameService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        image_client=image_client,
        user_service=UserService(user_repository),
        game_service=game_service,
        close_resources=close_resources,
    )
