# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-08
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # OpenAI (embeddings + moderation)
    openai_api_key: str
    openai_base_url: str
    openai_embed_model: str

    # Chroma (category anchors)
    chroma_path: str
    chroma_collection: str

    # Correction learning log (JSON Lines)
    corrections_path: str

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        # OpenAI
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",        # e.g. https://api.openai.com/v1
        "openai_embed_model": "OPENAI_EMBED_MODEL",  # e.g. text-embedding-3-small

        # Chroma
        "chroma_path": "CHROMA_PATH",
        "chroma_collection": "CHROMA_COLLECTION",

        # Learning store
        "corrections_path": "FT_CORRECTIONS_PATH",
    }

    # Defaults for the non-secret fields; the API key has none
    DEFAULTS = {
        "openai_base_url": "https://api.openai.com/v1",
        "openai_embed_model": "text-embedding-3-small",
        "chroma_path": "./data/chroma",
        "chroma_collection": "category_vectors",
        "corrections_path": "./data/learning-data.jsonl",
    }

    # Convenient *groups* for use in tests / health checks
    OPENAI_ENV_VARS = (
        "OPENAI_API_KEY",
    )

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables."""
        kwargs = {
            field_name: (os.getenv(env_name) or Config.DEFAULTS.get(field_name, "")).strip()
            for field_name, env_name in Config.ENV_VARS.items()
        }
        return Config(**kwargs)

    def __post_init__(self):
        """
        Fail fast if any required config is missing.
        """
        missing_fields = [k for k, v in self.__dict__.items() if not v]

        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_base_url": self.openai_base_url,
            "openai_embed_model": self.openai_embed_model,
            "chroma_path": self.chroma_path,
            "chroma_collection": self.chroma_collection,
            "corrections_path": self.corrections_path,
        }
