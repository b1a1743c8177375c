from __future__ import annotations

import re


# Curated terms a token must equal exactly to count as a keyword.
KEYWORD_VOCABULARY: frozenset[str] = frozenset({
    # Technology
    "javascript", "typescript", "react", "node", "python", "java", "php",
    "sql", "mongodb", "mysql", "html", "css", "angular", "vue", "express",
    "django", "flask", "spring", "laravel", "aws", "azure", "docker",
    "kubernetes", "git", "linux", "windows", "oracle", "postgresql", "redis",
    "elasticsearch",
    # Business domains
    "marketing", "sales", "finance", "accounting", "hr", "management",
    "consulting", "legal", "healthcare", "engineering", "design",
    "operations", "procurement", "real estate", "logistics", "manufacturing",
    "construction", "education", "retail", "hospitality",
    "telecommunications",
    # Seniority
    "senior", "junior", "lead", "head", "director", "coordinator",
    "assistant", "executive", "supervisor",
    # General professional terms
    "team", "project", "product", "strategy", "business", "technical",
    "digital", "technology", "innovation", "automation", "communication",
    "customer", "service", "quality", "safety", "compliance", "audit", "risk",
    "planning", "analysis", "research",
})

# Any token containing one of these is kept ("engineers", "pm-manager", ...).
ROLE_SUFFIXES: tuple[str, ...] = (
    "engineer",
    "manager",
    "developer",
    "analyst",
    "specialist",
    "coordinator",
    "assistant",
    "supervisor",
)

MIN_TOKEN_LENGTH = 3

_PUNCTUATION = re.compile(r"[^\w\s]", re.ASCII)


def _is_keyword(token: str) -> bool:
    if token in KEYWORD_VOCABULARY:
        return True
    return any(suffix in token for suffix in ROLE_SUFFIXES)


def extract_keywords(text: str | None) -> set[str]:
    """
    Extract the normalised keyword set of a free-text blob.

    The text is lower-cased, punctuation becomes whitespace, and tokens shorter
    than three characters are dropped. A remaining token is a keyword when it
    is a vocabulary term or contains a role suffix.

    Note: multi-word vocabulary entries ("real estate") can never equal a
    single token, so they never match.

    Args:
        text: Any free text (None and "" yield an empty set)

    Returns:
        Set of keywords
    """
    if not text:
        return set()

    cleaned = _PUNCTUATION.sub(" ", text.lower())
    return {
        token
        for token in cleaned.split()
        if len(token) >= MIN_TOKEN_LENGTH and _is_keyword(token)
    }


def match_score(a: set[str], b: set[str]) -> float:
    """Overlap of two keyword sets relative to the larger one, in [0, 1]."""
    if not a or not b:
        return 0.0
    return len(a & b) / max(len(a), len(b))


def join_text(*parts: object) -> str:
    """Join the non-empty parts of a record into one matching blob."""
    return " ".join(str(part) for part in parts if part not in (None, ""))
