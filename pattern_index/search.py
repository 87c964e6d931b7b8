from typing import List, Sequence

from pydantic import BaseModel

from .keywords import tokenize
from .models import KeywordMapping


class SearchHit(BaseModel):
    mapping: KeywordMapping
    score: int


def score_mapping(query_tokens: Sequence[str], mapping: KeywordMapping) -> int:
    keywords = set(mapping.keywords)
    title_tokens = set(tokenize(mapping.title, min_length=1))
    score = 0
    for token in query_tokens:
        if token in keywords:
            score += 2
        elif any(kw.startswith(token) or token.startswith(kw) for kw in keywords):
            score += 1
        if token in title_tokens:
            score += 1
    return score


def search_index(query: str, mappings: Sequence[KeywordMapping], limit: int = 5) -> List[SearchHit]:
    """Rank mappings against a free-text query, best first.

    Ties keep index order. Mappings that share no term with the query are
    never returned.
    """
    query_tokens = tokenize(query, min_length=2)
    if not query_tokens:
        return []
    scored = [(score_mapping(query_tokens, m), idx, m) for idx, m in enumerate(mappings)]
    scored = [entry for entry in scored if entry[0] > 0]
    scored.sort(key=lambda entry: (-entry[0], entry[1]))
    return [SearchHit(mapping=m, score=score) for score, _, m in scored[:limit]]
