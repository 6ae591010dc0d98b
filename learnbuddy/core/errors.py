"""Domain errors raised by services; routers map them to HTTP status codes."""


class LearnBuddyError(Exception):
    """Base class for errors scoped to a single request or round."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class DomainValidationError(LearnBuddyError):
    """Missing or out-of-range input. Surfaced to the caller, never retried."""

    status_code = 400


class NotFoundError(LearnBuddyError):
    status_code = 404


class ScoringModeConflict(LearnBuddyError):
    """A score path was used on a game whose scoring discipline forbids it."""

    status_code = 409


class ContentAdvisorError(LearnBuddyError):
    """Remote content source unreachable or returned unusable data.

    Always recovered locally by falling back to a default round.
    """

    status_code = 502
