from .aggregator import score_resume
from .content import ACTION_VERBS, classify_bullet, evaluate_content
from .errors import InvalidInputShape, ScoringError
from .keywords import evaluate_keywords, extract_keywords
from .sections import evaluate_sections

__all__ = [
    "score_resume",
    "evaluate_sections",
    "evaluate_keywords",
    "extract_keywords",
    "evaluate_content",
    "classify_bullet",
    "ACTION_VERBS",
    "InvalidInputShape",
    "ScoringError",
]
