"""Classifier strategies used by the classification pass."""

from __future__ import annotations

import itertools
import random
from typing import Iterator, List, Optional, Protocol, Tuple

from docvault.models import Classification, Document

DEFAULT_CATEGORIES: List[Tuple[str, str]] = [
    ("Education", "Research Papers"),
    ("Business", "Reports"),
    ("Health", "Medical Records"),
]

BASE_CONFIDENCE = 85
CONFIDENCE_SPREAD = 10
MAX_KEYWORDS = 4


class Classifier(Protocol):
    def begin_batch(self) -> None:
        """Reset any per-pass state before the first document of a batch."""

    def classify(self, document: Document) -> Classification:
        ...


class RoundRobinClassifier:
    """Placeholder classifier that cycles through a fixed category list.

    Assignment follows the order documents are handed in, not their content.
    Confidence is 85 plus a fresh random integer in [0, 10).
    """

    def __init__(
        self,
        categories: Optional[List[Tuple[str, str]]] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.categories = list(categories or DEFAULT_CATEGORIES)
        self._rng = rng or random.Random()
        self._cycle: Iterator[Tuple[str, str]] = itertools.cycle(self.categories)

    def begin_batch(self) -> None:
        self._cycle = itertools.cycle(self.categories)

    def classify(self, document: Document) -> Classification:
        category, subcategory = next(self._cycle)
        return Classification(
            category=category,
            subcategory=subcategory,
            confidence=BASE_CONFIDENCE + self._rng.randrange(CONFIDENCE_SPREAD),
            keywords=title_keywords(document.title),
        )


def title_keywords(title: str) -> List[str]:
    return title.lower().split()[:MAX_KEYWORDS]
