"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from duckweb.agent.tools.websearch.duckduckgo import DEFAULT_ENDPOINT
from duckweb.agent.tools.websearch.duckduckgo import DEFAULT_USER_AGENT as SEARCH_USER_AGENT
from duckweb.agent.tools.websearch.extractor import DEFAULT_MAX_CHARS
from duckweb.agent.tools.websearch.webpage import DEFAULT_USER_AGENT as FETCH_USER_AGENT


class Base(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WebSearchConfig(Base):
    """DuckDuckGo search tool configuration."""

    endpoint: str = DEFAULT_ENDPOINT
    user_agent: str = SEARCH_USER_AGENT
    requests_per_minute: int = Field(default=30, ge=1)
    timeout_s: float = Field(default=30.0, gt=0)
    default_max_results: int = Field(default=10, ge=1)
    max_results_limit: int = Field(default=20, ge=1)


class WebFetchConfig(Base):
    """Webpage content fetch tool configuration."""

    user_agent: str = FETCH_USER_AGENT
    requests_per_minute: int = Field(default=20, ge=1)
    timeout_s: float = Field(default=30.0, gt=0)
    max_chars: int = Field(default=DEFAULT_MAX_CHARS, ge=1)
    allow_private_network: bool = True


class RateLimitConfig(Base):
    """Shared rate limiter settings."""

    window_s: float = Field(default=60.0, gt=0)
    persist: bool = False
    state_file: str = "~/.duckweb/ratelimit.json"


class WebToolsConfig(Base):
    """Web tools configuration."""

    search: WebSearchConfig = Field(default_factory=WebSearchConfig)
    fetch: WebFetchConfig = Field(default_factory=WebFetchConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)


class ToolsConfig(Base):
    """Tools configuration."""

    web: WebToolsConfig = Field(default_factory=WebToolsConfig)


class Config(Base):
    """Root configuration for duckweb."""

    tools: ToolsConfig = Field(default_factory=ToolsConfig)
