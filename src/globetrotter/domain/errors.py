"""Typed failures raised by the game engine and its stores."""

KIND_NOT_FOUND = "not_found"
KIND_CONFLICT = "conflict"
KIND_INVALID_INPUT = "invalid_input"
KIND_RESOURCE_EXHAUSTED = "resource_exhausted"
KIND_UNAVAILABLE = "unavailable"


class GlobetrotterError(Exception):
    """Base class for failures reported to callers."""

    kind: str = KIND_INVALID_INPUT
    code: str = "error"
    message: str = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class UserNotFoundError(GlobetrotterError):
    kind = KIND_NOT_FOUND
    code = "user_not_found"
    message = "User not found"


class SessionNotFoundError(GlobetrotterError):
    kind = KIND_NOT_FOUND
    code = "session_not_found"
    message = "Game not found"


class QuestionNotFoundError(GlobetrotterError):
    kind = KIND_NOT_FOUND
    code = "question_not_found"
    message = "Question not found"


class NoQuestionsRemainingError(GlobetrotterError):
    kind = KIND_NOT_FOUND
    code = "no_questions_remaining"
    message = "No questions remaining"


class AlreadyAnsweredError(GlobetrotterError):
    kind = KIND_CONFLICT
    code = "already_answered"
    message = "Question already answered"


class UsernameTakenError(GlobetrotterError):
    kind = KIND_CONFLICT
    code = "username_taken"
    message = "Username already exists"


class InvalidOptionError(GlobetrotterError):
    kind = KIND_INVALID_INPUT
    code = "invalid_option"
    message = "Selected destination is not in the list of options"


class SessionMismatchError(GlobetrotterError):
    kind = KIND_INVALID_INPUT
    code = "session_mismatch"
    message = "Question does not belong to this game"


class InvalidUsernameError(GlobetrotterError):
    kind = KIND_INVALID_INPUT
    code = "invalid_username"
    message = "Username must not be empty"


class InsufficientCatalogSizeError(GlobetrotterError):
    kind = KIND_RESOURCE_EXHAUSTED
    code = "insufficient_catalog_size"
    message = "Not enough destinations to build a game"


class StoreUnavailableError(GlobetrotterError):
    kind = KIND_UNAVAILABLE
    code = "store_unavailable"
    message = "Storage is unavailable"
