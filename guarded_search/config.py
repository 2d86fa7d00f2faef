# Copyright (c) 2026 Heureum AI. All rights reserved.

"""MCP Server configuration."""
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerConfig(BaseModel):
    """Per-server configuration.

    Attributes:
        name (str): Unique identifier for the server.
        host (str): Hostname or IP address to bind to.
        port (int): Port number to listen on.
        transport (str): Transport protocol, one of "stdio", "sse" or
            "streamable-http".
    """

    name: str
    host: str = "127.0.0.1"
    port: int
    transport: str = "stdio"


class Settings(BaseSettings):
    """MCP Server settings.

    Attributes:
        SERVERS (dict[str, ServerConfig]): Map of server key to configuration.
        SEARCH_PROVIDER (str): Name of the search provider ("gemini" or "openai").
        GEMINI_API_KEY (str): API key for the Gemini API.
        GEMINI_SEARCH_MODEL (str): Gemini model used with Google Search grounding.
        OPENAI_API_KEY (str): API key for OpenAI services.
        OPENAI_SEARCH_MODEL (str): Model name for OpenAI web search.
        MAX_QUERY_LENGTH (int): Maximum characters kept from a sanitized query.
        MAX_RESPONSE_LENGTH (int): Maximum characters kept from a provider summary.
        RATE_LIMIT_MAX (int): Requests admitted per rate-limit window.
        RATE_LIMIT_WINDOW (float): Rate-limit window length in seconds.
        CACHE_ENABLED (bool): Whether caching is enabled.
        CACHE_TTL (float): Cache time-to-live in seconds.
        CACHE_MAX_SIZE (int): Maximum number of cache entries.
        PROVIDER_TIMEOUT (float): Timeout in seconds for one provider call.
            Zero or negative disables the timeout.
        LOG_LEVEL (str): Root logging level.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    SERVERS: dict[str, ServerConfig] = {
        "web": ServerConfig(name="gemini-web-search", port=3001),
    }

    SEARCH_PROVIDER: str = "gemini"

    GEMINI_API_KEY: str = ""
    GEMINI_SEARCH_MODEL: str = "gemini-2.5-flash"

    OPENAI_API_KEY: str = ""
    OPENAI_SEARCH_MODEL: str = "gpt-4o-mini-search-preview"

    MAX_QUERY_LENGTH: int = 500
    MAX_RESPONSE_LENGTH: int = 4000

    RATE_LIMIT_MAX: int = 30
    RATE_LIMIT_WINDOW: float = 60.0

    CACHE_ENABLED: bool = True
    CACHE_TTL: float = 900.0
    CACHE_MAX_SIZE: int = 100

    PROVIDER_TIMEOUT: float = 30.0

    LOG_LEVEL: str = "INFO"


settings = Settings()
