import re
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class HeaderGrammar(BaseModel):
    """Line-level grammar of an extracted pattern file."""

    marker: str = "## Pattern "
    delimiter: str = "---"
    problem_prefix: str = "PROBLEM:"
    concept_prefix: str = "CONCEPT:"
    fallback_title: str = "Unknown Pattern"

    model_config = ConfigDict(frozen=True)

    @property
    def header_pattern(self) -> "re.Pattern[str]":
        # "## Pattern 3: Title" -> ordinal "3", title "Title"
        return re.compile(
            r"^" + re.escape(self.marker.rstrip()) + r"\s+(?P<ordinal>[^:]*?)\s*:\s*(?P<title>.*\S)\s*$"
        )


class TopicSeed(BaseModel):
    topic: str
    seeds: Tuple[str, ...]

    model_config = ConfigDict(frozen=True)


class Category(BaseModel):
    heading: str
    files: Tuple[str, ...]

    model_config = ConfigDict(frozen=True)


class CrossReference(BaseModel):
    problem: str
    primary: str
    related: Tuple[str, ...]

    model_config = ConfigDict(frozen=True)


DEFAULT_STOPWORDS = (
    "the", "and", "for", "with", "use", "from", "call", "make", "case",
    "when", "need", "this", "that", "your", "more", "how", "you", "all",
)

DEFAULT_TOPICS = [
    TopicSeed(topic="GenServer", seeds=("GenServer", "state", "process")),
    TopicSeed(topic="LiveView", seeds=("LiveView", "Phoenix", "web", "UI", "realtime")),
    TopicSeed(topic="Phoenix", seeds=("Phoenix", "controller", "web", "API")),
    TopicSeed(topic="Ash", seeds=("Ash", "resources", "domain-driven")),
    TopicSeed(topic="Error", seeds=("error", "handling", "exception")),
    TopicSeed(topic="OTP", seeds=("OTP", "supervisor", "restart")),
    TopicSeed(topic="Testing", seeds=("testing", "ExUnit", "test")),
    TopicSeed(topic="Performance", seeds=("performance", "optimization", "speed")),
    TopicSeed(topic="Concurrency", seeds=("concurrency", "Task", "Agent", "async")),
    TopicSeed(topic="Caching", seeds=("caching", "cache", "ETS")),
    TopicSeed(topic="Retry", seeds=("retry", "backoff", "transient")),
    TopicSeed(topic="Bulkhead", seeds=("bulkhead", "pool", "limit", "isolation")),
    TopicSeed(topic="Graceful", seeds=("graceful", "degradation", "fallback", "load")),
    TopicSeed(topic="Ecto", seeds=("Ecto", "migration", "database")),
    TopicSeed(topic="Nerves", seeds=("Nerves", "embedded", "firmware")),
]

DEFAULT_CATEGORIES = [
    Category(heading="State Management", files=("genserver.md", "ets_performance.md", "concurrent_tasks.md")),
    Category(heading="Web Patterns", files=("liveview.md", "phoenix_controllers.md")),
    Category(heading="Ash Framework", files=("ash_resources.md", "migration_strategies.md")),
    Category(heading="OTP/Supervision", files=("otp_supervisor.md",)),
    Category(heading="Error Handling", files=("error_handling.md",)),
    Category(heading="Testing", files=("exunit_testing.md",)),
    Category(heading="Resilience", files=("retry_strategies.md", "bulkhead_patterns.md", "graceful_degradation.md")),
    Category(heading="Embedded Systems", files=("nerves_firmware.md",)),
]

DEFAULT_CROSS_REFERENCES = [
    CrossReference(problem="Concurrent state", primary="genserver.md", related=("ets", "concurrent", "otp")),
    CrossReference(problem="Web UI performance", primary="liveview.md", related=("phoenix", "tasks", "ets")),
    CrossReference(problem="Fault-tolerant", primary="otp_supervisor.md", related=("genserver", "errors", "degradation")),
    CrossReference(problem="Resilience", primary="retry_strategies.md", related=("bulkhead", "degradation")),
    CrossReference(problem="Database", primary="ash_resources.md", related=("migration", "ecto")),
    CrossReference(problem="Error handling", primary="error_handling.md", related=("exunit", "genserver")),
    CrossReference(problem="Testing", primary="exunit_testing.md", related=("errors", "liveview")),
    CrossReference(problem="Performance", primary="ets_performance.md", related=("genserver", "tasks")),
    CrossReference(problem="Caching", primary="ets_performance.md", related=("tasks", "degradation")),
]


class Settings(BaseSettings):
    """Runtime configuration for the pattern index builder."""

    repo_root: Path = Path(__file__).resolve().parent.parent
    patterns_dir: str = "patterns"
    source_dir: str = "extracted_data"
    output_file: str = "PATTERN_INDEX.md"
    json_output_file: Optional[str] = "pattern_index.json"
    file_suffix: str = "_patterns.txt"
    target_extension: str = ".md"

    # Validation targets
    expected_files: int = 14
    target_tokens: int = 2000
    token_tolerance: float = 0.1
    chars_per_token: int = 4

    # Keyword and mapping bounds
    max_mappings: int = 50
    max_keywords: int = 6
    min_keyword_length: int = 3
    directory_preview: int = 2
    directory_title_width: int = 40
    stopwords: Tuple[str, ...] = DEFAULT_STOPWORDS
    excluded_prefixes: Tuple[str, ...] = ("[", "vs", "with")

    grammar: HeaderGrammar = HeaderGrammar()
    topics: List[TopicSeed] = DEFAULT_TOPICS
    categories: List[Category] = DEFAULT_CATEGORIES
    cross_references: List[CrossReference] = DEFAULT_CROSS_REFERENCES

    update_command: str = "python tools/build_pattern_index.py"

    model_config = SettingsConfigDict(env_prefix="PATTERN_INDEX_")

    @property
    def patterns_path(self) -> Path:
        return self.repo_root / self.patterns_dir

    @property
    def source_path(self) -> Path:
        return self.patterns_path / self.source_dir

    @property
    def output_path(self) -> Path:
        return self.patterns_path / self.output_file

    @property
    def json_output_path(self) -> Optional[Path]:
        if not self.json_output_file:
            return None
        return self.patterns_path / self.json_output_file


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
