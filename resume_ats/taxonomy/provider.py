from __future__ import annotations

from typing import Protocol, Sequence


class TaxonomyProvider(Protocol):
    """Skill vocabulary used to treat synonyms ("k8s", "Kubernetes") as one keyword."""

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        """Return normalized text and optional canonical skill ID."""

    def multiword_terms(self) -> tuple[str, ...]:
        """Return known skill phrases that span more than one word."""

    def canonical_ids(self, tokens: Sequence[str]) -> set[str]:
        """Return canonical IDs of every known skill found as a contiguous run of tokens."""
