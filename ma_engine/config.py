"""Configuration settings for the VAR acquisition engine."""

from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    data_dir: Path = base_dir / "data"
    db_path: Path = data_dir / "ma_engine.db"

    # API Keys
    anthropic_api_key: str = ""

    # LLM Settings
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = 1024
    narrative_timeout: float = 20.0  # seconds before falling back to templates

    # Ranking Settings
    headline_count: int = 10  # top-N candidates that get a one-line headline

    # Scenario Settings
    default_ebitda_margin: float = 10.0  # percent, used when a target has none

    # Database URL
    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
