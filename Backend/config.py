"""
Centralized configuration for the Backend app.
- Loads from environment variables and an optional app.yaml file.
- Provides typed settings via Pydantic models.
- Exposes helpers for logging and CORS.
"""
from __future__ import annotations

import os
from functools import lru_cache
from typing import Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
import yaml

# Ensure .env is loaded early
load_dotenv()


class CORSConfig(BaseModel):
    allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    allow_credentials: bool = True


class FastAPIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 5000
    reload: bool = False
    workers: int = 1
    cors: CORSConfig = Field(default_factory=CORSConfig)


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    slow_request_threshold_ms: int = 1200


class LLMConfig(BaseModel):
    provider: str = "langchain-openai"
    default_model: str = "meta-llama/Llama-3.1-8B-Instruct"
    base_url: str = "https://router.huggingface.co/v1"
    api_key_env: str = "HF_API_TOKEN"
    temperature: float = 0.7
    max_tokens: Optional[int] = 200
    request_timeout: int = 15


class TranslationConfig(BaseModel):
    base_url: str = "https://router.huggingface.co/hf-inference/models"
    models: Dict[str, str] = Field(
        default_factory=lambda: {
            "fr": "Helsinki-NLP/opus-mt-en-fr",
            "de": "Helsinki-NLP/opus-mt-en-de",
            "es": "Helsinki-NLP/opus-mt-en-es",
        }
    )
    default_language: str = "fr"
    request_timeout: int = 15

    @field_validator("default_language")
    def _lower_language(cls, v: str) -> str:
        return v.strip().lower()


class DialogueConfig(BaseModel):
    # None keeps a pending "what task?" question open until the next message.
    slot_ttl_seconds: Optional[float] = None


class AppMeta(BaseModel):
    app_name: str = "Jarvis Todo Assistant"
    environment: str = Field(default_factory=lambda: os.getenv("APP_ENV", "dev"))
    version: str = "1.2"


class Settings(BaseModel):
    meta: AppMeta = Field(default_factory=AppMeta)
    fastapi: FastAPIConfig = Field(default_factory=FastAPIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    dialogue: DialogueConfig = Field(default_factory=DialogueConfig)

    @property
    def inference_api_key(self) -> Optional[str]:
        return os.getenv(self.llm.api_key_env) or None


def _load_yaml_config(path: str) -> dict:
    if not os.path.isfile(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _env_override(cfg: dict) -> dict:
    """Override select fields from env; keep simple to avoid surprises."""
    if os.getenv("APP_ENV"):
        cfg.setdefault("meta", {})["environment"] = os.getenv("APP_ENV")
    if os.getenv("LOG_LEVEL"):
        cfg.setdefault("logging", {})["level"] = os.getenv("LOG_LEVEL")

    llm_cfg = cfg.setdefault("llm", {})
    for k_env, key in [
        ("HF_BASE_URL", "base_url"),
        ("HF_MODEL", "default_model"),
    ]:
        val = os.getenv(k_env)
        if val is not None:
            llm_cfg[key] = val

    if os.getenv("HF_TRANSLATION_URL") is not None:
        cfg.setdefault("translation", {})["base_url"] = os.getenv("HF_TRANSLATION_URL")

    ttl = os.getenv("SLOT_TTL_SECONDS")
    if ttl:
        cfg.setdefault("dialogue", {})["slot_ttl_seconds"] = float(ttl)

    return cfg


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    base_cfg = _load_yaml_config(os.path.join(os.path.dirname(__file__), "app.yaml"))
    merged = _env_override(base_cfg)
    # Pydantic will coerce nested dicts into typed models
    return Settings(**merged)


# ---- Helpers ---------------------------------------------------------------

def configure_logging(settings: Settings) -> None:
    import logging
    import sys

    console = logging.StreamHandler(sys.stdout)
    logging.basicConfig(
        level=settings.logging.level.upper(),
        format=(
            "%(message)s"
            if settings.logging.json_format
            else "%(asctime)s %(levelname)s %(name)s - %(message)s"
        ),
        handlers=[console],
    )


def build_cors(settings: Settings):
    from fastapi.middleware.cors import CORSMiddleware

    def add(app):
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.fastapi.cors.allow_origins,
            allow_methods=settings.fastapi.cors.allow_methods,
            allow_headers=settings.fastapi.cors.allow_headers,
            allow_credentials=settings.fastapi.cors.allow_credentials,
        )
        return app

    return add
