"""
AccessKontrol: composable access-control checks.

AccessKontrol gives application code a small base class for writing
permission checks that return a GRANTED or DENIED response carrying an
optional message and a machine-readable code, and for combining many
checks into one decision.

Basic Usage:
    >>> from accesskontrol import AccessKontrol, AccessResponse, AccessDeniedException
    >>>
    >>> class ArticleKontrol(AccessKontrol):
    ...     def can_edit(self, article, user) -> AccessResponse:
    ...         if article.author == user:
    ...             return self.granted()
    ...         return self.denied("Only the author can edit", "not_author")
    ...
    ...     def can_edit_all(self, articles, user):
    ...         return self.can_all(articles, lambda a: self.can_edit(a, user))
    >>>
    >>> try:
    ...     ArticleKontrol().can_edit_all(articles, user).assert_granted()
    ... except AccessDeniedException as e:
    ...     print(e.get_messages())
"""

__version__ = "2.0.0"

from accesskontrol.base import AccessKontrol
from accesskontrol.decision import AccessDecision
from accesskontrol.exceptions import (
    AccessDeniedException,
    AccessKontrolError,
    NoDecision,
)
from accesskontrol.types import (
    AccessResponse,
    AccessResponses,
    DeniedResponse,
    DeniedResponses,
    GrantedResponse,
    GrantedResponses,
    denied_responses,
    first_decision,
    granted_responses,
)

__all__ = [
    "__version__",
    # Checker
    "AccessKontrol",
    # Decisions and responses
    "AccessDecision",
    "AccessResponse",
    "GrantedResponse",
    "DeniedResponse",
    "AccessResponses",
    "GrantedResponses",
    "DeniedResponses",
    "first_decision",
    "granted_responses",
    "denied_responses",
    # Exceptions
    "AccessKontrolError",
    "AccessDeniedException",
    "NoDecision",
]
