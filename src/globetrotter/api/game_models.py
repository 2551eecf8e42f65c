"""Pydantic models for game API request payloads."""

from uuid import UUID

from pydantic import BaseModel, Field


class CreateUserRequest(BaseModel):
    """Payload for registering a username."""

    username: str = Field(min_length=1, max_length=64)


class StartGameRequest(BaseModel):
    """Payload for starting a game for a username."""

    username: str = Field(min_length=1)


class SubmitAnswerRequest(BaseModel):
    """Payload for answering a question."""

    game_id: UUID
    question_id: UUID
    selected_destination: int
