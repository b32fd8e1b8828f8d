from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Sequence

from .provider import TaxonomyProvider

_WS_RE = re.compile(r"\s+")


def _normalize(value: str) -> str:
    return _WS_RE.sub(" ", value).strip().lower()


class LocalTaxonomy(TaxonomyProvider):
    """Synonym table loaded from a flat JSON object of ``{"term": "skill_id"}``."""

    def __init__(self, synonyms_path: str | Path | None = None) -> None:
        path = Path(synonyms_path) if synonyms_path else Path(__file__).with_name("synonyms.json")
        self._synonyms = self._load_synonyms(path)
        self._multiword = tuple(sorted(term for term in self._synonyms if " " in term))
        self._max_words = max((term.count(" ") + 1 for term in self._synonyms), default=1)

    @staticmethod
    def _load_synonyms(path: Path) -> dict[str, str]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise ValueError(f"Synonyms file '{path}' must contain a JSON object")
        return {_normalize(str(key)): str(value) for key, value in raw.items()}

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        normalized = _normalize(raw)
        return normalized, self._synonyms.get(normalized)

    def multiword_terms(self) -> tuple[str, ...]:
        return self._multiword

    def canonical_ids(self, tokens: Sequence[str]) -> set[str]:
        lowered = [token.lower() for token in tokens]
        found: set[str] = set()
        for size in range(1, self._max_words + 1):
            for index in range(0, len(lowered) - size + 1):
                canonical = self._synonyms.get(" ".join(lowered[index:index + size]))
                if canonical:
                    found.add(canonical)
        return found
