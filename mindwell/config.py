import logging
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_TEXT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_VISION_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"
DEFAULT_SPEECH_MODEL = "whisper-large-v3-turbo"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(RuntimeError):
    """Startup configuration is missing or malformed. Not recoverable."""


@dataclass(frozen=True)
class Settings:
    groq_api_key: str
    text_model: str = DEFAULT_TEXT_MODEL
    vision_model: str = DEFAULT_VISION_MODEL
    speech_model: str = DEFAULT_SPEECH_MODEL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def cache_key(self) -> tuple:
        """Plain values that identify a client; a change here means a new client."""
        return (self.groq_api_key, self.text_model, self.vision_model, self.speech_model, self.request_timeout)


def _lookup(key: str, secrets: Optional[Mapping], default: Optional[str] = None) -> Optional[str]:
    # Streamlit secrets win over the environment
    if secrets is not None:
        try:
            value = secrets.get(key)
        except FileNotFoundError:
            value = None
        if value:
            return str(value)
    return os.environ.get(key) or default


def load_settings(secrets: Optional[Mapping] = None, dotenv: bool = True) -> Settings:
    """Build Settings from a secrets mapping and the process environment.

    Raises ConfigError when GROQ_API_KEY is absent or a value is malformed.
    """
    if dotenv:
        load_dotenv()

    api_key = _lookup("GROQ_API_KEY", secrets)
    if not api_key:
        raise ConfigError("GROQ_API_KEY is not set. Add it to .streamlit/secrets.toml or the environment.")

    raw_timeout = _lookup("MINDWELL_REQUEST_TIMEOUT", secrets, str(DEFAULT_REQUEST_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigError(f"MINDWELL_REQUEST_TIMEOUT must be a number, got {raw_timeout!r}")
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"MINDWELL_REQUEST_TIMEOUT must be a positive number, got {raw_timeout!r}")

    log_level = _lookup("MINDWELL_LOG_LEVEL", secrets, DEFAULT_LOG_LEVEL).upper()
    # getLevelName maps known names to their int level, unknown ones to a string
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"MINDWELL_LOG_LEVEL must be a logging level name, got {log_level!r}")

    return Settings(
        groq_api_key=api_key,
        text_model=_lookup("MINDWELL_TEXT_MODEL", secrets, DEFAULT_TEXT_MODEL),
        vision_model=_lookup("MINDWELL_VISION_MODEL", secrets, DEFAULT_VISION_MODEL),
        speech_model=_lookup("MINDWELL_SPEECH_MODEL", secrets, DEFAULT_SPEECH_MODEL),
        request_timeout=timeout,
        log_level=log_level,
    )
