from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = os.getenv("RESTAURANT_API_URL", "http://localhost:8000")
    timeout: float = float(os.getenv("RESTAURANT_API_TIMEOUT", "10"))
    # Drop responses to requests that a newer request has superseded.
    discard_stale_responses: bool = _env_flag("DISCARD_STALE_RESPONSES")


DEFAULT_CLIENT_CONFIG = ClientConfig()
