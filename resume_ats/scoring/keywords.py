from __future__ import annotations

import re
from dataclasses import dataclass

from resume_ats.core.scoring import get_scoring_value
from resume_ats.schemas.report import KeywordMatchResult
from resume_ats.schemas.resume import ResumeDocument, unique_casefold
from resume_ats.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

from .utils import is_stop_word, normalize_space, phrase_pattern, stem, to_score, word_tokens

_CLAUSE_SPLIT_RE = re.compile(r"[\n\r;:,()\[\]{}!?|•]|\.(?=\s|$)|\s[-–—]\s")
_NUMERIC_RE = re.compile(r"^[\d.+#/-]+$")

# Multi-word skills worth keeping even when a posting mentions them only once.
_KNOWN_PHRASES = frozenset(
    {
        "project management",
        "product management",
        "machine learning",
        "deep learning",
        "data analysis",
        "data science",
        "data visualization",
        "user research",
        "user stories",
        "design systems",
        "design thinking",
        "customer service",
        "lead generation",
        "content marketing",
        "email marketing",
        "social media",
        "google ads",
        "a/b testing",
        "computer vision",
        "power bi",
        "unit testing",
        "distributed systems",
        "cross-functional teams",
        "financial modeling",
        "account management",
        "supply chain",
        "quality assurance",
    }
)


@dataclass(slots=True)
class _Candidate:
    key: str
    display: str
    count: int
    first_pos: int
    words: int


def _clauses(text: str) -> list[str]:
    return [part for part in _CLAUSE_SPLIT_RE.split(text or "") if part and part.strip()]


def _is_candidate_word(token: str) -> bool:
    if len(token) < 2 or is_stop_word(token):
        return False
    return not _NUMERIC_RE.match(token)


def _known_phrases(taxonomy: TaxonomyProvider) -> frozenset[str]:
    return _KNOWN_PHRASES | frozenset(taxonomy.multiword_terms())


def _contains_words(longer: str, shorter: str) -> bool:
    return f" {shorter} " in f" {longer} "


def extract_keywords(
    job_description: str,
    *,
    limit: int | None = None,
    taxonomy: TaxonomyProvider | None = None,
) -> list[str]:
    """Derive candidate keywords from a job posting by frequency.

    Single words and 2-3 word phrases are counted per clause; phrases survive
    only when they repeat or are known multi-word skills. Words that only ever
    occur inside a surviving phrase are folded into it. Ranking is by
    frequency, then by first occurrence, so output is deterministic.
    """
    taxonomy = taxonomy or get_default_taxonomy_provider()
    max_candidates = int(limit if limit is not None else get_scoring_value("keywords.max_candidates", 40))
    max_words = int(get_scoring_value("keywords.max_phrase_words", 3))
    min_phrase_freq = int(get_scoring_value("keywords.min_phrase_frequency", 2))
    known = _known_phrases(taxonomy)

    singles: dict[str, _Candidate] = {}
    phrases: dict[str, _Candidate] = {}
    position = 0

    for clause in _clauses(job_description):
        tokens = word_tokens(clause)
        for index, token in enumerate(tokens):
            position += 1
            if _is_candidate_word(token):
                key = token.lower()
                entry = singles.get(key)
                if entry is None:
                    singles[key] = _Candidate(key=key, display=token, count=1, first_pos=position, words=1)
                else:
                    entry.count += 1

            for size in range(2, max_words + 1):
                window = tokens[index:index + size]
                if len(window) < size or not all(_is_candidate_word(word) for word in window):
                    continue
                key = " ".join(word.lower() for word in window)
                entry = phrases.get(key)
                if entry is None:
                    phrases[key] = _Candidate(
                        key=key,
                        display=" ".join(window),
                        count=1,
                        first_pos=position,
                        words=size,
                    )
                else:
                    entry.count += 1

    kept_phrases = [
        candidate
        for candidate in phrases.values()
        if candidate.count >= min_phrase_freq or candidate.key in known
    ]
    kept_phrases = [
        candidate
        for candidate in kept_phrases
        if not any(
            other.words > candidate.words
            and other.count >= candidate.count
            and _contains_words(other.key, candidate.key)
            for other in kept_phrases
        )
    ]

    kept_singles: list[_Candidate] = []
    for candidate in singles.values():
        absorbed = sum(
            phrase.count
            for phrase in kept_phrases
            if candidate.key in phrase.key.split(" ")
        )
        if candidate.count - absorbed > 0:
            kept_singles.append(candidate)

    ranked = sorted(
        [*kept_phrases, *kept_singles],
        key=lambda item: (-item.count, item.first_pos, -item.words),
    )
    return unique_casefold([candidate.display for candidate in ranked])[:max_candidates]


class _ResumeCorpus:
    def __init__(self, text: str, taxonomy: TaxonomyProvider) -> None:
        self.text = normalize_space(text)
        tokens = [token.lower() for token in word_tokens(text)]
        self.stems = [stem(token) for token in tokens]
        self.canonical_ids = taxonomy.canonical_ids(tokens)

    def has_exact(self, keyword: str) -> bool:
        return bool(phrase_pattern(keyword).search(self.text))

    def has_stem_sequence(self, keyword: str) -> bool:
        needle = [stem(token) for token in word_tokens(keyword)]
        if not needle:
            return False
        width = len(needle)
        return any(self.stems[index:index + width] == needle for index in range(0, len(self.stems) - width + 1))


def _resolve_candidates(
    document: ResumeDocument,
    job_description: str | None,
    target_keywords: list[str] | None,
    taxonomy: TaxonomyProvider,
) -> list[str]:
    explicit = unique_casefold(list(target_keywords or []))
    if explicit:
        return explicit
    if document.target_keywords:
        return list(document.target_keywords)
    corpus = job_description if job_description and job_description.strip() else document.target_job_description
    if corpus and corpus.strip():
        return extract_keywords(corpus, taxonomy=taxonomy)
    return []


def evaluate_keywords(
    document: ResumeDocument,
    job_description: str | None = None,
    target_keywords: list[str] | None = None,
    *,
    taxonomy: TaxonomyProvider | None = None,
) -> KeywordMatchResult:
    taxonomy = taxonomy or get_default_taxonomy_provider()
    candidates = _resolve_candidates(document, job_description, target_keywords, taxonomy)
    if not candidates:
        return KeywordMatchResult(
            score=int(get_scoring_value("keywords.neutral_score", 40)),
            computed=False,
        )

    corpus = _ResumeCorpus(document.corpus_text(), taxonomy)
    use_variants = bool(get_scoring_value("keywords.match_variants", True))

    matched: list[str] = []
    missing: list[str] = []
    variants: list[str] = []
    for keyword in candidates:
        if corpus.has_exact(keyword):
            matched.append(keyword)
            continue
        if use_variants:
            _, canonical = taxonomy.normalize_skill(keyword)
            if (canonical and canonical in corpus.canonical_ids) or corpus.has_stem_sequence(keyword):
                matched.append(keyword)
                variants.append(keyword)
                continue
        missing.append(keyword)

    return KeywordMatchResult(
        score=to_score(100 * len(matched) / len(candidates)),
        candidates=candidates,
        matched_keywords=matched,
        missing_keywords=missing,
        variant_matches=variants,
        computed=True,
    )
