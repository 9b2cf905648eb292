"""
Configuration settings for resume_struct.

Values come from the environment (a local .env file is loaded first).  The
remote drafting service is optional, so nothing here fails at import time;
a missing OpenAI key only surfaces when an OpenAI client is built.
"""

from dotenv import load_dotenv
load_dotenv()          # ← must be before os.getenv(...)
import os
from pathlib import Path

# LLM Provider Configuration
# Set to "ollama" or "openai"
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai").lower()

# Model Configuration
# RESUME_STRUCT_MODEL overrides the per-provider default
DEFAULT_MODEL = {
    "ollama": "llama3.1",
    "openai": "gpt-4o-mini",
}
MODEL_OVERRIDE = os.getenv("RESUME_STRUCT_MODEL", "")

# OpenAI Configuration
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL_PARAMS = {
    "temperature": 0,
    "max_tokens": 2048,
}

# Ollama Configuration
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")

# Drafting: off unless asked for
USE_LLM_DRAFT = os.getenv("USE_LLM_DRAFT", "false").strip().lower() in {"1", "true", "yes", "on"}
CACHE_DIR = Path(os.getenv("CACHE_DIR", ".cache"))

# Rule parser tuning
CONTACT_SCAN_LINES = int(os.getenv("CONTACT_SCAN_LINES", "10"))
FUZZY_HEADING_SLACK = int(os.getenv("FUZZY_HEADING_SLACK", "10"))


def get_model_for_provider(provider: str = None) -> str:
    """Get the model to use for the specified provider."""
    if MODEL_OVERRIDE:
        return MODEL_OVERRIDE
    provider = (provider or LLM_PROVIDER).lower()
    return DEFAULT_MODEL.get(provider, DEFAULT_MODEL["openai"])
