import re
from typing import Iterable, List, Sequence

from .config import Settings, TopicSeed
from .models import PatternRecord

_NON_WORD = re.compile(r"[^\w\s-]")


def tokenize(text: str, stopwords: Iterable[str] = (), min_length: int = 3) -> List[str]:
    stop = set(stopwords)
    tokens = _NON_WORD.sub(" ", text.lower()).split()
    return [token for token in tokens if len(token) >= min_length and token not in stop]


def topic_seeds(title: str, topics: Sequence[TopicSeed]) -> List[str]:
    """Seed vocabulary of the first topic whose name occurs in ``title``."""
    for entry in topics:
        if entry.topic in title:
            return [seed.lower() for seed in entry.seeds]
    return []


def _keep(keyword: str, settings: Settings) -> bool:
    if len(keyword) < settings.min_keyword_length:
        return False
    return not keyword.startswith(tuple(settings.excluded_prefixes))


def derive_keywords(record: PatternRecord, settings: Settings) -> List[str]:
    """Ranked keyword set for one record.

    Topic seeds come first, then title, problem and concept terms. Duplicates
    keep their first position and the result is capped at ``max_keywords``.
    """
    stop = settings.stopwords
    min_length = settings.min_keyword_length
    candidates = (
        topic_seeds(record.title, settings.topics)
        + tokenize(record.title, stop, min_length)
        + tokenize(record.problem, stop, min_length)
        + tokenize(record.concept, stop, min_length)
    )

    keywords: List[str] = []
    seen = set()
    for keyword in candidates:
        if len(keywords) >= settings.max_keywords:
            break
        keyword = keyword.strip().lower()
        if not keyword or keyword in seen or not _keep(keyword, settings):
            continue
        seen.add(keyword)
        keywords.append(keyword)
    return keywords
