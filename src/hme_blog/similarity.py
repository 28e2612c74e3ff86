"""Related-article ranking by term-frequency cosine similarity.

Texts are compared on their title and excerpt only:
- tokenize (lowercase, ASCII letters/digits, whitespace-split)
- vectorize (token -> raw count, via CountVectorizer)
- cosine similarity between the two count vectors
- rank candidates, most similar first, keeping input order on ties
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Sequence

from sklearn.feature_extraction.text import CountVectorizer
from sklearn.metrics.pairwise import cosine_similarity as pairwise_cosine

from .models import Article, ScoredArticle

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 3

# ASCII-only on purpose: non-Latin scripts produce no tokens.
_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9\s]")


def tokenize(text: Optional[str]) -> List[str]:
    """Split text into lowercase ASCII alphanumeric tokens."""
    if not text:
        return []
    cleaned = _NON_TOKEN_CHARS.sub(" ", text.lower())
    return [token for token in cleaned.split() if token]


def _count_vectorizer() -> CountVectorizer:
    # Raw counts over our own tokens; sklearn must not re-lowercase or re-split.
    return CountVectorizer(tokenizer=tokenize, lowercase=False, token_pattern=None)


def build_vector(tokens: Sequence[str]) -> Dict[str, int]:
    """Count occurrences of each token."""
    if not tokens:
        return {}
    vectorizer = CountVectorizer(analyzer=lambda doc: doc)
    counts = vectorizer.fit_transform([list(tokens)]).toarray()[0]
    return {
        str(term): int(count)
        for term, count in zip(vectorizer.get_feature_names_out(), counts)
    }


def cosine_similarity(text_a: Optional[str], text_b: Optional[str]) -> float:
    """
    Cosine similarity between the term-frequency vectors of two texts.

    Returns 0.0 when either text has no tokens.
    """
    if not tokenize(text_a) or not tokenize(text_b):
        return 0.0

    matrix = _count_vectorizer().fit_transform([text_a, text_b])
    # sklearn scores an all-zero row as 0 rather than dividing by zero.
    return float(pairwise_cosine(matrix[0:1], matrix[1:2])[0, 0])


def rank_related(
    current: Article,
    candidates: Sequence[Article],
    limit: int = DEFAULT_LIMIT,
) -> List[ScoredArticle]:
    """
    Return up to `limit` candidates ordered by similarity to `current`.

    The current article is excluded by slug. Ties keep the candidates' input
    order because `sorted` is stable.
    """
    current_text = current.text
    scored: List[ScoredArticle] = []
    for candidate in candidates:
        if candidate.slug == current.slug:
            continue
        score = cosine_similarity(current_text, candidate.text)
        scored.append(ScoredArticle(**candidate.model_dump(), score=score))

    ranked = sorted(scored, key=lambda item: item.score, reverse=True)
    logger.debug(
        "Ranked %d of %d candidates for %s", len(scored), len(candidates), current.slug
    )
    return ranked[: max(limit, 0)]


rank = rank_related
