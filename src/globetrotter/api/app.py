"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID

import httpx
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError

from globetrotter.api.game_models import (
    CreateUserRequest,
    StartGameRequest,
    SubmitAnswerRequest,
)
from globetrotter.app_logging import configure_logging
from globetrotter.containers import AppContainer
from globetrotter.domain.errors import (
    KIND_CONFLICT,
    KIND_INVALID_INPUT,
    KIND_NOT_FOUND,
    KIND_RESOURCE_EXHAUSTED,
    KIND_UNAVAILABLE,
    GlobetrotterError,
    SessionMismatchError,
    StoreUnavailableError,
)
from globetrotter.domain.models import UserRecord
from globetrotter.domain.sessions import (
    AnswerResult,
    NextQuestion,
    QuestionView,
    SessionResult,
    SessionSummary,
)

_STATUS_BY_KIND = {
    KIND_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    KIND_CONFLICT: status.HTTP_409_CONFLICT,
    KIND_INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    KIND_RESOURCE_EXHAUSTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    KIND_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    started_at = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(GlobetrotterError)
    async def handle_game_error(
        request: Request, exc: GlobetrotterError
    ) -> JSONResponse:
        return _error_response(exc)

    @app.exception_handler(APIError)
    @app.exception_handler(httpx.HTTPError)
    async def handle_store_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Store request failed: %s %s", request.method, request.url)
        return _error_response(StoreUnavailableError())

    @app.get("/health")
    async def health() -> dict[str, object]:
        """Simple health check endpoint."""
        return {
            "status": "ok",
            "uptime_seconds": round(time.monotonic() - started_at, 3),
            "timestamp": datetime.now(tz=UTC).isoformat(),
        }

    @app.post("/api/users", status_code=status.HTTP_201_CREATED)
    async def create_user(
        payload: CreateUserRequest, request: Request
    ) -> dict[str, object]:
        """Register a new username."""
        state_container: AppContainer = request.app.state.container
        user = state_container.user_service.create_user(payload.username)
        return _serialize_user(user)

    @app.get("/api/users/{username}")
    async def get_user(username: str, request: Request) -> dict[str, object]:
        """Look up a user by username."""
        state_container: AppContainer = request.app.state.container
        return _serialize_user(state_container.user_service.get_user(username))

    @app.get("/api/destinations/random")
    async def random_destination(request: Request) -> dict[str, object]:
        """Return clues for a random destination without its answer."""
        state_container: AppContainer = request.app.state.container
        destination = state_container.game_service.random_destination()
        return {"id": destination.id, "clues": list(destination.clues)}

    @app.post("/api/game/play", status_code=status.HTTP_201_CREATED)
    async def start_game(
        payload: StartGameRequest, request: Request
    ) -> dict[str, object]:
        """Start a new game for a user."""
        state_container: AppContainer = request.app.state.container
        game_id = state_container.game_service.create_session(payload.username)
        return {"game_id": str(game_id)}

    @app.get("/api/game/{game_id}/next-question")
    async def next_question(game_id: UUID, request: Request) -> dict[str, object]:
        """Return the next unanswered question."""
        state_container: AppContainer = request.app.state.container
        question = state_container.game_service.next_question(game_id)
        return _serialize_next_question(question)

    @app.post("/api/game/{game_id}/submit-answer")
    async def submit_answer(
        game_id: UUID, payload: SubmitAnswerRequest, request: Request
    ) -> dict[str, object]:
        """Submit the answer for a question."""
        if payload.game_id != game_id:
            raise SessionMismatchError("Game ID mismatch")
        state_container: AppContainer = request.app.state.container
        result = state_container.game_service.submit_answer(
            game_id, payload.question_id, payload.selected_destination
        )
        return _serialize_answer(result)

    @app.get("/api/game/{game_id}/result")
    async def game_result(game_id: UUID, request: Request) -> dict[str, object]:
        """Return the full result of a game."""
        state_container: AppContainer = request.app.state.container
        return _serialize_result(state_container.game_service.get_result(game_id))

    @app.get("/api/game/{game_id}/summary")
    async def game_summary(game_id: UUID, request: Request) -> dict[str, object]:
        """Return the shareable summary of a game."""
        state_container: AppContainer = request.app.state.container
        summary = await state_container.game_service.get_summary(game_id)
        return _serialize_summary(summary)

    return app


def _error_response(exc: GlobetrotterError) -> JSONResponse:
    return JSONResponse(
        status_code=_STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST),
        content={"error": str(exc), "code": exc.code},
    )


def _serialize_user(user: UserRecord) -> dict[str, object]:
    return {
        "id": str(user.id),
        "username": user.username,
        "created_at": user.created_at.isoformat(),
    }


def _serialize_next_question(question: NextQuestion) -> dict[str, object]:
    return {
        "game_id": str(question.session_id),
        "question_id": str(question.question_id),
        "question_number": question.position,
        "total_questions": question.total_questions,
        "question": question.clue,
        "options": [
            {"destination_id": option.destination_id, "label": option.label}
            for option in question.options
        ],
        "options_display": {
            str(option.destination_id): option.label for option in question.options
        },
        "has_next": question.has_next,
    }


def _serialize_answer(result: AnswerResult) -> dict[str, object]:
    payload: dict[str, object] = {
        "correct": result.correct,
        "correct_destination_id": result.correct_destination_id,
        "correct_city": result.correct_city,
        "correct_country": result.correct_country,
    }
    if result.fun_fact is not None:
        payload["fun_fact"] = result.fun_fact
    if result.trivia is not None:
        payload["trivia"] = result.trivia
    return payload


def _serialize_question(question: QuestionView) -> dict[str, object]:
    return {
        "id": str(question.question_id),
        "position": question.position,
        "question": question.clue,
        "options": list(question.option_destination_ids),
        "is_answered": question.answered,
        "correct_destination_id": question.correct_destination_id,
        "selected_destination_id": question.selected_destination_id,
        "correct": question.correct,
    }


def _serialize_result(result: SessionResult) -> dict[str, object]:
    return {
        "game_id": str(result.session_id),
        "status": result.status,
        "total_questions": result.total_questions,
        "total_answered": result.total_answered,
        "total_correct": result.total_correct,
        "total_incorrect": result.total_incorrect,
        "questions": [_serialize_question(question) for question in result.questions],
    }


def _serialize_summary(summary: SessionSummary) -> dict[str, object]:
    return {
        "game_id": str(summary.session_id),
        "username": summary.username,
        "total_questions": summary.total_questions,
        "total_answered": summary.total_answered,
        "total_correct": summary.total_correct,
        "created_at": summary.created_at.isoformat(),
        "image_url": summary.image_url,
    }
