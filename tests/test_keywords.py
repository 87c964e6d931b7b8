from pattern_index.config import Settings, TopicSeed
from pattern_index.keywords import derive_keywords, tokenize, topic_seeds
from pattern_index.models import PatternRecord


def _record(title, problem="", concept=""):
    return PatternRecord(ordinal=1, title=title, problem=problem, concept=concept)


def test_seeds_come_first_then_title_and_problem_terms():
    settings = Settings()
    record = _record("GenServer State Handling", problem="state leaks across requests")
    assert derive_keywords(record, settings) == ["genserver", "state", "process", "handling", "leaks", "across"]


def test_stopwords_are_removed_from_title():
    settings = Settings()
    assert derive_keywords(_record("Retry with Backoff"), settings) == ["retry", "backoff", "transient"]


def test_first_matching_topic_wins_and_short_seeds_are_dropped():
    settings = Settings()
    keywords = derive_keywords(_record("LiveView Phoenix Forms"), settings)
    assert keywords == ["liveview", "phoenix", "web", "realtime", "forms"]


def test_excluded_prefixes_are_filtered():
    settings = Settings()
    record = _record("Plain Title", concept="[link] versus vsync withdraw")
    assert derive_keywords(record, settings) == ["plain", "title", "link", "versus"]


def test_keyword_set_is_capped_and_unique():
    settings = Settings()
    record = _record(
        "Caching Caching Hot Keys In ETS Tables",
        problem="Cache stampede when ETS tables are cold",
        concept="warm caches before traffic arrives",
    )
    keywords = derive_keywords(record, settings)
    assert len(keywords) <= 6
    assert len({k.lower() for k in keywords}) == len(keywords)
    assert keywords[:3] == ["caching", "cache", "ets"]


def test_tokenize_keeps_hyphenated_terms():
    assert tokenize("Domain-driven design's core", stopwords=("core",)) == ["domain-driven", "design"]


def test_topics_are_configurable():
    settings = Settings(topics=[TopicSeed(topic="Kafka", seeds=("Kafka", "stream"))])
    assert topic_seeds("Kafka Consumer Lag", settings.topics) == ["kafka", "stream"]
    assert derive_keywords(_record("Kafka Consumer Lag"), settings) == ["kafka", "stream", "consumer", "lag"]


def test_keyword_cap_is_configurable():
    settings = Settings(max_keywords=2)
    assert derive_keywords(_record("GenServer State Handling"), settings) == ["genserver", "state"]
