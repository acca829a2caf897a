"""Configuration and settings"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Text generation (OpenAI-compatible endpoint, OpenRouter by default)
    openrouter_api_key: str = Field(default="")
    openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1")
    planner_model: str = Field(default="openai/gpt-oss-20b:free")
    content_model: str = Field(default="openai/gpt-oss-20b:free")
    style_model: str = Field(default="google/gemma-3-12b-it:free")
    max_output_tokens: int = Field(default=3500)
    generation_timeout: float = Field(default=180.0)
    max_concurrent_generations: int = Field(default=5)

    # Image search (Unsplash)
    unsplash_access_key: str = Field(default="")
    unsplash_api_url: str = Field(default="https://api.unsplash.com/search/photos")
    image_search_timeout: float = Field(default=10.0)
    image_fallback_keyword: str = Field(default="business")

    # Stylesheet: "generated" (model call) or "design_system" (fixed stylesheet)
    stylesheet_mode: str = Field(default="generated")
    stylesheet_html_budget: int = Field(default=60000)

    # Server
    frontend_url: str = Field(default="http://localhost:3000")
    log_level: str = Field(default="INFO")

    # API Configuration
    api_title: str = "Site Generator API"
    api_version: str = "0.1.0"


# Global settings instance
settings = Settings()
