"""Supabase-backed game session repository.

Session creation and answer submission go through the
``create_game_session`` and ``submit_session_answer`` Postgres functions so
each runs in a single transaction.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from globetrotter.domain.errors import StoreUnavailableError
from globetrotter.domain.sessions import (
    Answered,
    NewSessionQuestion,
    QuestionState,
    SessionQuestion,
    SessionRecord,
    Unanswered,
)
from globetrotter.services.game import SessionRepository

_SESSION_COLUMNS = (
    "id, user_id, total_questions, total_answered, total_correct, "
    "total_incorrect, created_at"
)
_QUESTION_COLUMNS = (
    "id, session_id, position, clue, option_destination_ids, "
    "correct_destination_id, selected_destination_id, is_correct"
)


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for game sessions."""

    client: Client

    def create_session(
        self,
        user_id: UUID,
        total_questions: int,
        questions: list[NewSessionQuestion],
    ) -> SessionRecord:
        """Create the session and its questions in one transaction."""
        response = self.client.rpc(
            "create_game_session",
            {
                "p_user_id": str(user_id),
                "p_total_questions": total_questions,
                "p_questions": [
                    {
                        "position": question.position,
                        "clue": question.clue,
                        "option_destination_ids": list(
                            question.option_destination_ids
                        ),
                        "correct_destination_id": question.correct_destination_id,
                    }
                    for question in questions
                ],
            },
        ).execute()
        row = _single(response.data)
        if not isinstance(row, dict):
            raise StoreUnavailableError("Failed to create game session")
        return _to_session(row)

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("game_sessions")
            .select(_SESSION_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_session(response.data[0])

    def get_question(self, question_id: UUID) -> SessionQuestion | None:
        """Return a question by id, if present."""
        response = (
            self.client.table("session_questions")
            .select(_QUESTION_COLUMNS)
            .eq("id", str(question_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_question(response.data[0])

    def get_next_unanswered(self, session_id: UUID) -> SessionQuestion | None:
        """Return the lowest-position unanswered question."""
        response = (
            self.client.table("session_questions")
            .select(_QUESTION_COLUMNS)
            .eq("session_id", str(session_id))
            .is_("selected_destination_id", "null")
            .order("position")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_question(response.data[0])

    def count_unanswered(self, session_id: UUID) -> int:
        """Return the number of unanswered questions."""
        response = (
            self.client.table("session_questions")
            .select("id")
            .eq("session_id", str(session_id))
            .is_("selected_destination_id", "null")
            .execute()
        )
        return len(response.data or [])

    def record_answer(
        self,
        session_id: UUID,
        question_id: UUID,
        selected_destination_id: int,
        correct: bool,
    ) -> bool:
        """Apply the answer and counter update; False if already answered."""
        response = self.client.rpc(
            "submit_session_answer",
            {
                "p_session_id": str(session_id),
                "p_question_id": str(question_id),
                "p_selected_destination_id": selected_destination_id,
                "p_is_correct": correct,
            },
        ).execute()
        return bool(_single(response.data))

    def list_questions(self, session_id: UUID) -> list[SessionQuestion]:
        """Return all questions of a session by position."""
        response = (
            self.client.table("session_questions")
            .select(_QUESTION_COLUMNS)
            .eq("session_id", str(session_id))
            .order("position")
            .execute()
        )
        return [_to_question(row) for row in response.data or []]


def _single(data: object) -> object:
    """Unwrap an RPC payload that may arrive as a scalar, object, or list."""
    if isinstance(data, list):
        return data[0] if data else None
    return data


def _to_session(row: dict[str, object]) -> SessionRecord:
    return SessionRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        total_questions=int(row["total_questions"]),
        total_answered=int(row.get("total_answered") or 0),
        total_correct=int(row.get("total_correct") or 0),
        total_incorrect=int(row.get("total_incorrect") or 0),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )


def _to_question(row: dict[str, object]) -> SessionQuestion:
    selected = row.get("selected_destination_id")
    state: QuestionState = Unanswered()
    if selected is not None:
        state = Answered(
            selected_destination_id=int(selected),
            correct=bool(row.get("is_correct")),
        )
    return SessionQuestion(
        id=UUID(str(row["id"])),
        session_id=UUID(str(row["session_id"])),
        position=int(row["position"]),
        clue=str(row["clue"]),
        option_destination_ids=tuple(
            int(item) for item in row.get("option_destination_ids") or []
        ),
        correct_destination_id=int(row["correct_destination_id"]),
        state=state,
    )
