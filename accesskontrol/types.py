"""
Response types for AccessKontrol.

Every check returns either a single ``AccessResponse`` (a GRANTED or
DENIED verdict with an optional message and code) or an
``AccessResponses`` aggregate built by fanning one check out over
several items. All of these are immutable value objects.

The response variants form a closed union: ``GrantedResponse`` always
carries ``AccessDecision.GRANTED`` and ``DeniedResponse`` always carries
``AccessDecision.DENIED``. Aggregation partitions responses by that
decision tag.
"""

from __future__ import annotations

import logging
import weakref
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, overload

from accesskontrol.decision import AccessDecision
from accesskontrol.exceptions import AccessDeniedException, NoDecision

if TYPE_CHECKING:
    from accesskontrol.base import AccessKontrol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, init=False)
class AccessResponse(ABC):
    """
    The response that every AccessKontrol check returns.

    The issuing checker is kept as a weak reference for diagnostics
    only: it never keeps the checker alive and never takes part in
    equality. ``issuer_name`` survives the checker.

    Attributes:
        decision: GRANTED or DENIED, fixed by the concrete variant.
        message: Human-readable explanation.
        code: Machine-readable code.
        issuer_name: Class name of the checker that produced the response.

    See Also:
        GrantedResponse, DeniedResponse
    """

    decision: ClassVar[AccessDecision]

    message: str | None
    code: str | None
    issuer_name: str
    _issuer_ref: weakref.ref[Any] | None = field(repr=False, compare=False)

    def __init__(
        self,
        issuer: AccessKontrol,
        message: str | None = None,
        code: str | None = None,
    ) -> None:
        if type(self) is AccessResponse:
            raise TypeError(
                "AccessResponse cannot be instantiated directly; "
                "use GrantedResponse or DeniedResponse"
            )
        object.__setattr__(self, "message", message)
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "issuer_name", type(issuer).__name__)
        object.__setattr__(self, "_issuer_ref", weakref.ref(issuer))

    def __getstate__(self) -> dict[str, Any]:
        # The issuer reference does not cross pickling; issuer_name does.
        state = dict(self.__dict__)
        state["_issuer_ref"] = None
        return state

    @property
    def issuer(self) -> AccessKontrol | None:
        """The checker that produced this response, if it is still alive."""
        if self._issuer_ref is None:
            return None
        return self._issuer_ref()

    def to_bool(self) -> bool:
        """Convert the response to a boolean."""
        return self.decision.to_bool()

    def __bool__(self) -> bool:
        return self.to_bool()

    def is_granted(self) -> bool:
        return self.decision is AccessDecision.GRANTED

    def is_denied(self) -> bool:
        return self.decision is AccessDecision.DENIED

    def assert_granted(self) -> None:
        """
        Raise if the response is DENIED.

        Raises:
            AccessDeniedException: Wrapping this response.
        """
        if self.is_denied():
            logger.debug(
                f"Asserted denied response from '{self.issuer_name}': "
                f"code={self.code}"
            )
            raise AccessDeniedException(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "decision": self.decision.value,
            "message": self.message,
            "code": self.code,
            "issuer": self.issuer_name,
        }


@dataclass(frozen=True, init=False)
class GrantedResponse(AccessResponse):
    """
    A GRANTED verdict. Message and code are optional.

    Example:
        >>> GrantedResponse(kontrol).decision
        <AccessDecision.GRANTED: 'GRANTED'>
    """

    decision: ClassVar[AccessDecision] = AccessDecision.GRANTED

    def __init__(
        self,
        issuer: AccessKontrol,
        message: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(issuer, message, code)


@dataclass(frozen=True, init=False)
class DeniedResponse(AccessResponse):
    """
    A DENIED verdict. Message and code are mandatory.

    Raises:
        ValueError: If ``message`` or ``code`` is empty or not a string.

    Example:
        >>> response = DeniedResponse(kontrol, "Not the owner", "not_owner")
        >>> response.to_bool()
        False
    """

    decision: ClassVar[AccessDecision] = AccessDecision.DENIED

    message: str
    code: str

    def __init__(self, issuer: AccessKontrol, message: str, code: str) -> None:
        if not isinstance(message, str) or not message:
            raise ValueError(f"DeniedResponse requires a message, got {message!r}")
        if not isinstance(code, str) or not code:
            raise ValueError(f"DeniedResponse requires a code, got {code!r}")
        super().__init__(issuer, message, code)


def granted_responses(responses: Iterable[AccessResponse]) -> list[GrantedResponse]:
    """Select the granted responses, keeping their order."""
    return [
        response for response in responses
        if response.decision is AccessDecision.GRANTED
    ]  # type: ignore[misc]


def denied_responses(responses: Iterable[AccessResponse]) -> list[DeniedResponse]:
    """Select the denied responses, keeping their order."""
    return [
        response for response in responses
        if response.decision is AccessDecision.DENIED
    ]  # type: ignore[misc]


def first_decision(responses: Sequence[AccessResponse]) -> AccessResponse:
    """
    Reduce responses to the one that decides the overall outcome.

    Returns the first DENIED response, or the first response when all
    of them are GRANTED.

    Raises:
        NoDecision: If ``responses`` is empty.
    """
    if not responses:
        raise NoDecision()
    denied = denied_responses(responses)
    return denied[0] if denied else responses[0]


class AccessResponses(Sequence[AccessResponse], ABC):
    """
    An ordered, non-empty aggregate of responses with one combined decision.

    Produced when one check fans out over several items. The aggregate
    is DENIED as soon as a single element is DENIED. ``message``,
    ``code`` and ``issuer_name`` are read from the deciding response:
    the first element of a ``GrantedResponses``, the first denial of a
    ``DeniedResponses``.

    Use ``AccessResponses.of()`` to let the responses pick the flavor.

    Example:
        >>> responses = AccessResponses.of([granted, denied])
        >>> isinstance(responses, DeniedResponses)
        True
        >>> [r.code for r in responses.denied_responses]
        ['not_owner']
    """

    decision: ClassVar[AccessDecision]

    def __init__(self, responses: Iterable[AccessResponse]) -> None:
        self._responses: tuple[AccessResponse, ...] = tuple(responses)
        if not self._responses:
            raise ValueError(f"{type(self).__name__} cannot be empty")
        self._deciding = self._select_deciding()

    @abstractmethod
    def _select_deciding(self) -> AccessResponse:
        """Pick the response that decides the aggregate, validating the input."""

    @classmethod
    def of(cls, responses: Iterable[AccessResponse]) -> AccessResponses:
        """
        Wrap responses into the matching aggregate flavor.

        Raises:
            ValueError: If ``responses`` is empty.
        """
        responses = tuple(responses)
        if denied_responses(responses):
            return DeniedResponses(responses)
        return GrantedResponses(responses)

    @property
    def responses(self) -> tuple[AccessResponse, ...]:
        return self._responses

    @property
    def message(self) -> str | None:
        return self._deciding.message

    @property
    def code(self) -> str | None:
        return self._deciding.code

    @property
    def issuer_name(self) -> str:
        return self._deciding.issuer_name

    @property
    def issuer(self) -> AccessKontrol | None:
        return self._deciding.issuer

    @property
    def granted_responses(self) -> list[GrantedResponse]:
        return granted_responses(self._responses)

    @property
    def denied_responses(self) -> list[DeniedResponse]:
        return denied_responses(self._responses)

    def first_decision(self) -> AccessResponse:
        """Get the response that decides the aggregate outcome."""
        return self._deciding

    def to_bool(self) -> bool:
        """True if no response is DENIED."""
        return not self.denied_responses

    def __bool__(self) -> bool:
        return self.to_bool()

    def assert_granted(self) -> None:
        """
        Raise if any response is DENIED.

        Raises:
            AccessDeniedException: Wrapping every response of this aggregate.
        """
        if not self.to_bool():
            logger.debug(
                f"Asserted denied responses: {len(self.denied_responses)} of "
                f"{len(self._responses)} denied"
            )
            raise AccessDeniedException(self)

    @overload
    def __getitem__(self, index: int) -> AccessResponse: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[AccessResponse, ...]: ...

    def __getitem__(self, index: int | slice) -> AccessResponse | tuple[AccessResponse, ...]:
        return self._responses[index]

    def __len__(self) -> int:
        return len(self._responses)

    def __iter__(self) -> Iterator[AccessResponse]:
        return iter(self._responses)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccessResponses):
            return NotImplemented
        return type(self) is type(other) and self._responses == other._responses

    def __hash__(self) -> int:
        return hash((type(self), self._responses))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._responses)!r})"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "decision": self.decision.value,
            "message": self.message,
            "code": self.code,
            "responses": [response.to_dict() for response in self._responses],
        }


class GrantedResponses(AccessResponses):
    """
    Aggregate of responses that are all GRANTED.

    Raises:
        ValueError: If empty or if any response is DENIED.
    """

    decision: ClassVar[AccessDecision] = AccessDecision.GRANTED

    def _select_deciding(self) -> AccessResponse:
        if denied_responses(self._responses):
            raise ValueError("GrantedResponses cannot contain denied responses")
        return self._responses[0]


class DeniedResponses(AccessResponses):
    """
    Aggregate of responses containing at least one DENIED response.

    Raises:
        ValueError: If empty or if no response is DENIED.
    """

    decision: ClassVar[AccessDecision] = AccessDecision.DENIED

    def _select_deciding(self) -> AccessResponse:
        denied = denied_responses(self._responses)
        if not denied:
            raise ValueError("DeniedResponses requires at least one denied response")
        return denied[0]
