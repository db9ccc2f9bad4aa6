"""
Custom exceptions for AccessKontrol.

A denial is not an error: checks return it as data. These exceptions
exist for the places where a caller explicitly asks for a denial to be
raised (``assert_granted``) and for caller logic errors such as asking
for a combined decision over zero items.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from accesskontrol.decision import AccessDecision

if TYPE_CHECKING:
    from accesskontrol.types import AccessResponse, DeniedResponse


class AccessKontrolError(Exception):
    """
    Base exception for AccessKontrol.

    Catch this to handle both a raised denial (``AccessDeniedException``)
    and an empty fan-out (``NoDecision``) in one place. ``to_dict()``
    gives a JSON-ready record for audit logs.

    Attributes:
        message: Human-readable error description.
        details: Denial codes and messages, or other context.

    Example:
        >>> try:
        ...     kontrol.assert_granted(lambda k: k.can_view_all(documents, user))
        ... except AccessKontrolError as e:
        ...     audit_log.write(json.dumps(e.to_dict()))
        ...     raise
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class AccessDeniedException(AccessKontrolError):
    """
    Raised when a DENIED response is asserted.

    Wraps every response of the asserted check, not only the first
    denial, so callers can inspect all the reasons a check failed.
    All queries read the denied responses only, in their original order.

    Args:
        responses: A single response, or a sequence of responses
            (typically an ``AccessResponses`` from ``can_all``).

    Raises:
        ValueError: If ``responses`` contains no denied response.

    Example:
        >>> try:
        ...     kontrol.can_view(documents, user).assert_granted()
        ... except AccessDeniedException as e:
        ...     if e.has_error_code("not_owner"):
        ...         return forbidden(e.get_messages())
    """

    def __init__(self, responses: AccessResponse | Sequence[AccessResponse]) -> None:
        if not isinstance(responses, Sequence):
            responses = (responses,)
        self.responses: tuple[AccessResponse, ...] = tuple(responses)

        denied = self.denied_responses
        if not denied:
            raise ValueError("AccessDeniedException requires at least one denied response")

        details = {
            "codes": [response.code for response in denied],
            "messages": [response.message for response in denied],
        }
        super().__init__(denied[0].message, details)

    def __str__(self) -> str:
        return self.message

    def __reduce__(self) -> tuple[Any, ...]:
        # args only holds the message; rebuild from the responses instead
        return (type(self), (self.responses,))

    @property
    def denied_responses(self) -> list[DeniedResponse]:
        """Denied responses in original order."""
        return [
            response for response in self.responses
            if response.decision is AccessDecision.DENIED
        ]  # type: ignore[misc]

    def first(self) -> DeniedResponse:
        """Get the first denied response."""
        return self.denied_responses[0]

    def has_error_code(self, code: str) -> bool:
        """Check if the error code is present in the denied responses."""
        return any(response.code == code for response in self.denied_responses)

    def get_error_code(self, code: str) -> DeniedResponse | None:
        """Find the first denied response matching the error code."""
        for response in self.denied_responses:
            if response.code == code:
                return response
        return None

    def get_messages(self) -> list[str]:
        """Get the messages of all denied responses, duplicates included."""
        return [response.message for response in self.denied_responses]

    def get_first_message(self) -> str:
        """Get the message of the first denied response."""
        return self.first().message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary, including every response."""
        result = super().to_dict()
        result["responses"] = [response.to_dict() for response in self.responses]
        return result


class NoDecision(AccessKontrolError):
    """
    Raised when a combined decision is requested over zero responses.

    "Are all of zero items allowed?" has no answer, so ``can_all`` and
    ``first_decision`` refuse an empty input instead of granting it.
    """

    def __init__(self, message: str = "No decision has been taken") -> None:
        super().__init__(message)
