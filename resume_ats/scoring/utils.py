from __future__ import annotations

import re

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►-–—*·"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d+[\.\)]))\s+")
_WORD_RE = re.compile(r"[A-Za-z][A-Za-z0-9+#./&-]*")
_EDGE_PUNCT = ".,;:!?()[]{}\"'/-&"
_STEM_SUFFIXES = (
    "ations",
    "ation",
    "ments",
    "ment",
    "ings",
    "ing",
    "ers",
    "er",
    "ed",
    "es",
    "s",
)

STOP_WORDS = frozenset(
    {
        "a", "about", "above", "across", "after", "again", "all", "also", "am", "an", "and",
        "any", "are", "as", "at", "be", "because", "been", "being", "between", "both", "but",
        "by", "can", "could", "did", "do", "does", "doing", "during", "each", "either", "etc",
        "every", "few", "for", "from", "further", "get", "go", "had", "has", "have", "having",
        "he", "her", "here", "him", "his", "how", "i", "if", "in", "into", "is", "it", "its",
        "just", "may", "me", "might", "more", "most", "must", "my", "no", "nor", "not", "of",
        "off", "on", "once", "one", "only", "or", "other", "our", "ours", "out", "over", "own",
        "per", "same", "shall", "she", "should", "so", "some", "such", "than", "that", "the",
        "their", "them", "then", "there", "these", "they", "this", "those", "through", "to",
        "too", "under", "until", "up", "upon", "us", "very", "via", "was", "we", "were", "what",
        "when", "where", "which", "while", "who", "whom", "why", "will", "with", "within",
        "without", "would", "you", "your", "yours",
    }
)

# Job-posting vocabulary that shows up everywhere and never distinguishes a candidate.
GENERIC_POSTING_WORDS = frozenset(
    {
        "ability", "able", "applicant", "applicants", "apply", "background", "benefits",
        "candidate", "candidates", "company", "competitive", "degree", "demonstrated",
        "description", "desired", "duties", "environment", "equal", "excellent", "experience",
        "experienced", "familiarity", "good", "great", "ideal", "including", "join", "job",
        "knowledge", "looking", "new", "opportunity", "plus", "position", "preferred",
        "proficiency", "proficient", "proven", "qualifications", "related", "required",
        "requirements", "responsibilities", "responsible", "role", "salary", "seeking",
        "skill", "skills", "strong", "team", "understanding", "using", "well", "work",
        "working", "year", "years",
    }
)


def normalize_space(value: str) -> str:
    return re.sub(r"\s+", " ", value or "").strip()


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line or "").strip()


def clean_token(token: str) -> str:
    return token.strip(_EDGE_PUNCT)


def word_tokens(text: str) -> list[str]:
    """Split text into word tokens, keeping original casing and tech glyphs like c++ or ci/cd."""
    output: list[str] = []
    for raw in _WORD_RE.findall(text or ""):
        cleaned = clean_token(raw)
        if cleaned:
            output.append(cleaned)
    return output


def is_stop_word(token: str) -> bool:
    lowered = token.lower()
    return lowered in STOP_WORDS or lowered in GENERIC_POSTING_WORDS


def stem(token: str) -> str:
    """Crude suffix stripper so manage, managed and management share a stem."""
    word = token.lower()
    if len(word) < 5:
        return word
    for suffix in _STEM_SUFFIXES:
        if suffix == "s" and word.endswith("ss"):
            continue
        if word.endswith(suffix) and len(word) - len(suffix) >= 4:
            word = word[: -len(suffix)]
            break
    if word.endswith("e") and len(word) > 4:
        word = word[:-1]
    return word


def phrase_pattern(phrase: str) -> re.Pattern[str]:
    """Case-insensitive whole-phrase pattern that tolerates tech glyphs at the edges."""
    parts = [re.escape(part) for part in normalize_space(phrase).split(" ") if part]
    body = r"\s+".join(parts)
    return re.compile(rf"(?<![a-z0-9]){body}(?![a-z0-9])", re.IGNORECASE)


def to_score(value: float) -> int:
    """Round half up and clamp into the 0-100 score range."""
    return max(0, min(100, int(value + 0.5)))
