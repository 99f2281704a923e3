"""
Application Configuration

This module defines all configuration settings for the PropGraph backend service.
Settings can be overridden via environment variables for different deployment environments.

Configuration categories:
- Neo4j connection settings
- Search policy (blacklisted labels, priority and sensitive properties)
- Snapshot fallback settings
- API settings
"""

from dataclasses import dataclass
from pathlib import Path
from pydantic_settings import BaseSettings
from typing import Optional


# Search policy defaults shared by Settings and SearchConfig
DEFAULT_BLACKLISTED_LABELS = ("User",)
DEFAULT_PRIORITY_PROPERTIES = ("display_name", "name", "title")
DEFAULT_SENSITIVE_PROPERTIES = ("password", "passwordHash", "salt", "token", "refreshToken")
DEFAULT_HIDDEN_LABELS = ("Entity",)
DEFAULT_MIN_QUERY_LENGTH = 2
DEFAULT_LIMIT = 50


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden by setting environment variables with the
    same name (case-insensitive). For example:
    - NEO4J_URI=bolt://localhost:7687
    - SEARCH_BLACKLISTED_LABELS='["User", "ApiKey"]'
    """

    # ==========================================================================
    # Neo4j Configuration
    # ==========================================================================
    # Neo4j connection URI - default assumes local instance
    neo4j_uri: str = "bolt://localhost:7687"
    # Neo4j authentication credentials
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    # Database name (use "neo4j" for Community Edition)
    neo4j_database: str = "neo4j"
    # Driver pool settings
    neo4j_max_connection_lifetime: float = 3 * 60 * 60
    neo4j_max_connection_pool_size: int = 50
    neo4j_connection_acquisition_timeout: float = 2 * 60

    # ==========================================================================
    # Search Policy
    # ==========================================================================
    # Records carrying any of these labels never appear in search results.
    # This is a security policy, callers cannot override it.
    search_blacklisted_labels: list[str] = list(DEFAULT_BLACKLISTED_LABELS)
    # Matches on these property keys are weighted 3x
    search_priority_properties: list[str] = list(DEFAULT_PRIORITY_PROPERTIES)
    # Never matched against and never returned
    search_sensitive_properties: list[str] = list(DEFAULT_SENSITIVE_PROPERTIES)
    search_min_query_length: int = DEFAULT_MIN_QUERY_LENGTH
    search_default_limit: int = DEFAULT_LIMIT
    # Scoring worker pool (1 = score sequentially)
    search_max_workers: int = 1
    # Minimum number of candidates before the worker pool is used
    search_parallel_threshold: int = 1000

    # Labels hidden from label browsing in addition to the blacklist
    hidden_labels: list[str] = list(DEFAULT_HIDDEN_LABELS)

    # ==========================================================================
    # Snapshot Fallback Configuration
    # ==========================================================================
    # JSON record file served when Neo4j cannot be reached at startup
    snapshot_path: str = "data/records.json"
    snapshot_fallback: bool = True

    # ==========================================================================
    # API Configuration
    # ==========================================================================
    api_title: str = "PropGraph - Property Graph Browser API"
    api_description: str = """
    Browse and search a labeled property graph stored in **Neo4j**.

    ## Features
    - Ranked free-text search over node properties
    - Label and property filters with a fixed label blacklist
    - Label browsing
    """
    api_version: str = "1.0.0"

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================
    log_level: str = "INFO"

    class Config:
        """Pydantic settings configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance - import this in other modules
settings = Settings()


@dataclass(frozen=True)
class SearchConfig:
    """
    Search policy injected into the filter builder, scorer and shaper.

    Attributes:
        blacklisted_labels: Labels whose records are always excluded
        priority_properties: Property keys whose matches get the 3x boost
        sensitive_properties: Property keys never scored and never returned
        min_query_length: Minimum query length after trimming
        default_limit: Result cap when the caller omits a limit
        max_workers: Scoring threads (1 = sequential)
        parallel_threshold: Candidate count at which threads are used
        hidden_labels: Extra labels hidden from label browsing
    """
    blacklisted_labels: frozenset[str] = frozenset(DEFAULT_BLACKLISTED_LABELS)
    priority_properties: frozenset[str] = frozenset(DEFAULT_PRIORITY_PROPERTIES)
    sensitive_properties: frozenset[str] = frozenset(DEFAULT_SENSITIVE_PROPERTIES)
    min_query_length: int = DEFAULT_MIN_QUERY_LENGTH
    default_limit: int = DEFAULT_LIMIT
    max_workers: int = 1
    parallel_threshold: int = 1000
    hidden_labels: frozenset[str] = frozenset(DEFAULT_HIDDEN_LABELS)


def get_search_config(source: Optional[Settings] = None) -> SearchConfig:
    """
    Build the search policy from application settings.

    Args:
        source: Settings to read from (default: the global settings)

    Returns:
        Frozen SearchConfig
    """
    s = source or settings
    return SearchConfig(
        blacklisted_labels=frozenset(s.search_blacklisted_labels),
        priority_properties=frozenset(s.search_priority_properties),
        sensitive_properties=frozenset(s.search_sensitive_properties),
        min_query_length=s.search_min_query_length,
        default_limit=s.search_default_limit,
        max_workers=s.search_max_workers,
        parallel_threshold=s.search_parallel_threshold,
        hidden_labels=frozenset(s.hidden_labels),
    )


def get_snapshot_path() -> Path:
    """
    Get the full path to the snapshot record file.

    Returns:
        Path object pointing to the snapshot JSON file
    """
    return Path(settings.snapshot_path)
