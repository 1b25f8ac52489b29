"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when domain validation fails."""

    def __init__(self, message: str, field: str | None = None, code: str | None = None) -> None:
        super().__init__(message, code=code or "VALIDATION_ERROR")
        self.field = field


class InvalidOperationError(DomainError):
    """Raised when an operation is invalid in the current state."""

    def __init__(
        self,
        operation: str,
        current_state: str,
        message: str | None = None,
        code: str | None = None,
    ) -> None:
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(msg, code=code or "INVALID_OPERATION")
        self.operation = operation
        self.current_state = current_state


class InvalidCommandState(InvalidOperationError):
    """A playback command arrived in a state that does not allow it (e.g. resume while idle)."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        super().__init__(operation, current_state, message, code="INVALID_COMMAND_STATE")


class EmptyPlaylist(ValidationError):
    """A playlist contained no playable entries after filtering."""

    def __init__(self, title: str = "", message: str | None = None) -> None:
        msg = message or f"Playlist '{title}' has no playable entries"
        super().__init__(msg, field="entries", code="EMPTY_PLAYLIST")
        self.title = title


# ── Source errors ──────────────────────────────────────────────────


class SourceError(DomainError):
    """Base class for failures fetching a track stream or a playlist listing."""

    def __init__(self, target: str, message: str | None = None, code: str | None = None) -> None:
        super().__init__(message or f"Failed to fetch {target}", code=code)
        self.target = target


class SourceUnavailable(SourceError):
    """Permanent failure: the item cannot be played and should not be retried."""

    def __init__(self, target: str, message: str | None = None, code: str | None = None) -> None:
        super().__init__(
            target, message or f"{target} is unavailable", code=code or "SOURCE_UNAVAILABLE"
        )


class SourceNotFound(SourceUnavailable):
    """The item does not exist or is private."""

    def __init__(self, target: str, message: str | None = None) -> None:
        super().__init__(
            target, message or f"{target} was not found or is private", code="SOURCE_NOT_FOUND"
        )


class SourceRateLimited(SourceError):
    """Transient failure: the source answered with a forbidden/blocked signal (HTTP 403)."""

    def __init__(self, target: str, message: str | None = None) -> None:
        super().__init__(
            target,
            message or f"Rate limited while fetching {target}",
            code="SOURCE_RATE_LIMITED",
        )


class RetriesExhaustedError(SourceUnavailable):
    """A transient failure persisted past the retry budget and is now treated as permanent."""

    def __init__(self, target: str, attempts: int, last_error: SourceError | None = None) -> None:
        super().__init__(
            target,
            f"Gave up on {target} after {attempts} attempts",
            code="RETRIES_EXHAUSTED",
        )
        self.attempts = attempts
        self.last_error = last_error


# ── Surface errors ─────────────────────────────────────────────────


class SurfaceRenderFailure(DomainError):
    """The control surface could not be created or edited. Logged, never propagated."""

    def __init__(self, message: str = "Failed to render control surface") -> None:
        super().__init__(message, code="SURFACE_RENDER_FAILURE")


# ── Transport errors ───────────────────────────────────────────────


class TransportError(DomainError):
    """The voice transport could not join a channel or start a stream."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, code=code or "TRANSPORT_ERROR")
