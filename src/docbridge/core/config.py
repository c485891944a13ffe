from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TranslationOptions(BaseModel):
    """Knobs consumed by the chunker and the chunk translator."""

    model_config = {"frozen": True}

    large_file_threshold: int = Field(default=10000, gt=0)
    max_chunk_size: int = Field(default=8000, gt=0)
    chunk_delay: float = Field(default=1.0, ge=0)


class Settings(BaseSettings):
    # Claude Messages API
    CLAUDE_API_KEY: Optional[str] = None
    CLAUDE_API_URL: str = "https://api.anthropic.com/v1/messages"
    CLAUDE_MODEL: str = "claude-3-5-sonnet-20240620"
    CLAUDE_MAX_TOKENS: int = 8192
    CLAUDE_API_VERSION: str = "2023-06-01"
    CLAUDE_TIMEOUT_SECONDS: float = 300.0

    # Source tree and language pair
    TRANSLATION_SOURCE_DIR: str = "docs"
    TRANSLATION_TARGET_DIR: str = "jp"  # created inside the source dir
    TRANSLATION_TARGET_LANGUAGE: str = "Japanese"
    TRANSLATION_EXTENSIONS: List[str] = ["md", "txt", "html"]

    # Chunking
    LARGE_FILE_THRESHOLD: int = 10000  # chars; above this documents are chunked
    MAX_CHUNK_SIZE: int = 8000  # chars per chunk
    CHUNK_DELAY_SECONDS: float = 1.0  # pause between chunk calls
    LATEST_ONLY_HOURS: int = 24  # window for --latest-only

    # Observability & UI
    LOG_FORMAT: str = "auto"  # json|plain|auto
    PROGRESS: bool = True
    NO_COLOR: bool = False

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    def translation_options(self) -> TranslationOptions:
        return TranslationOptions(
            large_file_threshold=self.LARGE_FILE_THRESHOLD,
            max_chunk_size=self.MAX_CHUNK_SIZE,
            chunk_delay=self.CHUNK_DELAY_SECONDS,
        )

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        if config_file:
            config_path: Optional[Path] = Path(config_file)
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_file}")
        else:
            # Auto-discover .docbridge.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".docbridge.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml  # type: ignore[import-untyped]

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)

        # Environment variables must beat the file, so only pass keys the
        # environment does not already provide.
        env_keys = set(cls._env_overrides())
        file_values = {
            key.upper(): value
            for key, value in config_data.items()
            if key.upper() not in env_keys
        }
        return cls(**file_values)

    @classmethod
    def _env_overrides(cls) -> List[str]:
        import os

        return [name for name in cls.model_fields if name in os.environ]
