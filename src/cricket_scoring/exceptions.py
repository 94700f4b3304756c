"""Error taxonomy for scoring and match management."""


class ScoringError(Exception):
    """Base exception for every failure reported back to a scorer or viewer."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ScoringError):
    """A match, innings or player id does not resolve."""

    status_code = 404


class InvalidCredentialError(ScoringError):
    """The supplied passcode does not match the stored hash."""

    status_code = 401


class ValidationError(ScoringError):
    """A request is missing fields or carries out-of-range values."""

    status_code = 400


class MissingParticipantsError(ScoringError):
    """A ball was recorded without both a striker and a bowler assigned."""

    status_code = 409


class NothingToUndoError(ScoringError):
    """An undo was requested for an innings with no active ball events."""

    status_code = 409


class IllegalTransitionError(ScoringError):
    """A lifecycle command is not valid in the current match state."""

    status_code = 409
