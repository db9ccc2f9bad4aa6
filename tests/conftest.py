"""
Pytest fixtures for AccessKontrol tests.

Provides a sample checker and the subjects/resources it checks.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from accesskontrol import AccessKontrol, AccessResponse, AccessResponses


@dataclass(frozen=True)
class User:
    name: str


@dataclass(frozen=True)
class Document:
    title: str


class DocumentKontrol(AccessKontrol):
    """Grants documents titled "granted" to any known user."""

    def can_view(self, document: Document, user: User | None) -> AccessResponse:
        if document.title == "granted" and user is not None:
            return self.granted("ok")
        if document.title == "wrong2":
            return self.denied("KO2", "ko2")
        return self.denied("KO", "ko")

    def can_view_all(self, documents: list[Document], user: User | None) -> AccessResponses:
        return self.can_all(documents, lambda document: self.can_view(document, user))


class ParallelDocumentKontrol(DocumentKontrol):
    max_workers = 4


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def kontrol() -> DocumentKontrol:
    """Create a sample document checker."""
    return DocumentKontrol()


@pytest.fixture
def parallel_kontrol() -> ParallelDocumentKontrol:
    """Create a sample document checker evaluating on a thread pool."""
    return ParallelDocumentKontrol()


@pytest.fixture
def user() -> User:
    return User("alice")


@pytest.fixture
def granted_doc() -> Document:
    return Document("granted")


@pytest.fixture
def wrong_doc() -> Document:
    return Document("wrong")


@pytest.fixture
def wrong2_doc() -> Document:
    return Document("wrong2")
