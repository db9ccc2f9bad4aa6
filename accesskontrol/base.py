"""
Checker base class for AccessKontrol.

Applications subclass ``AccessKontrol`` and write ``can_<action>``
methods that answer "can this subject do this action on this
resource?". Subjects and resources are whatever the application
passes in; the checker only builds and combines the responses.
"""

from __future__ import annotations

import concurrent.futures
import logging
from abc import ABC
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from accesskontrol.exceptions import NoDecision
from accesskontrol.types import (
    AccessResponse,
    AccessResponses,
    DeniedResponse,
    GrantedResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K", bound="AccessKontrol")


class AccessKontrol(ABC):
    """
    Abstract base class for access checkers.

    Subclasses return responses built with ``granted()`` and
    ``denied()``, and use ``can_all()`` to check a collection of items
    at once. Checks return their verdict as data; call
    ``assert_granted()`` on the result (or on the checker) to turn a
    denial into an ``AccessDeniedException``.

    Attributes:
        max_workers: When greater than 1, ``can_all`` evaluates items on
            a thread pool of this size. Results keep the input order and
            every item is evaluated before the aggregate is built.

    Example:
        >>> class DocumentKontrol(AccessKontrol):
        ...     def can_view(self, document, user) -> AccessResponse:
        ...         if document.owner == user:
        ...             return self.granted("Owner")
        ...         return self.denied("Not the owner", "not_owner")
        ...
        ...     def can_view_all(self, documents, user) -> AccessResponses:
        ...         return self.can_all(documents, lambda d: self.can_view(d, user))
        >>>
        >>> DocumentKontrol().can_view_all(documents, user).assert_granted()
    """

    max_workers: int | None = None

    def granted(self, message: str | None = None, code: str | None = None) -> GrantedResponse:
        """Shortcut for returning a GrantedResponse issued by this checker."""
        return GrantedResponse(self, message, code)

    def denied(self, message: str, code: str) -> DeniedResponse:
        """Shortcut for returning a DeniedResponse issued by this checker."""
        return DeniedResponse(self, message, code)

    def can_all(
        self,
        items: Iterable[T],
        check: Callable[[T], AccessResponse],
    ) -> AccessResponses:
        """
        Check every item and combine the results into one aggregate.

        All items are evaluated, in order, even after a denial, so the
        result carries every denial reason.

        Args:
            items: The items to check.
            check: Returns the response for one item.

        Returns:
            ``DeniedResponses`` if any item is denied, else ``GrantedResponses``.

        Raises:
            NoDecision: If ``items`` is empty.
        """
        items = list(items)
        if not items:
            raise NoDecision()

        if self.max_workers is not None and self.max_workers > 1 and len(items) > 1:
            responses = self._check_parallel(items, check)
        else:
            responses = [check(item) for item in items]

        result = AccessResponses.of(responses)
        logger.debug(
            f"{type(self).__name__}.can_all: {len(items)} items, "
            f"{len(result.denied_responses)} denied, decision={result.decision.value}"
        )
        return result

    def _check_parallel(
        self,
        items: list[T],
        check: Callable[[T], AccessResponse],
    ) -> list[AccessResponse]:
        """Evaluate checks on a thread pool, keeping input order."""
        workers = min(self.max_workers or 1, len(items))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order and re-raises the first failure
            return list(executor.map(check, items))

    def assert_granted(self: K, action: Callable[[K], Any]) -> None:
        """
        Run a check against this checker and raise if it is denied.

        Args:
            action: Receives this checker and returns an ``AccessResponse``
                or ``AccessResponses``.

        Raises:
            AccessDeniedException: If the returned verdict is DENIED.

        Example:
            >>> kontrol.assert_granted(lambda k: k.can_view(document, user))
        """
        action(self).assert_granted()
