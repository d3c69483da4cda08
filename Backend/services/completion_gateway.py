"""
Boundary to the remote generative / translation inference service.

Nothing in here raises to the caller: every call resolves to a GatewayResult
whose ``text`` is either the model output or a static fallback.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI

from config import LLMConfig, Settings, TranslationConfig

logger = logging.getLogger("completion_gateway")

NOT_CONFIGURED_REPLY = (
    "🤖 Smart chat isn't configured yet. I can still manage your todos: "
    "try \"show pending todos\" or \"add todo: buy milk\"."
)
GENERATE_FALLBACK_REPLY = (
    "I'm having trouble thinking right now. You can still say \"show pending todos\", "
    "\"add todo: ...\" or \"help\"."
)
TRANSLATION_NOT_CONFIGURED = "⚠️ Translation isn't configured."
TRANSLATION_FALLBACK = "⚠️ Translation is unavailable right now. Please try again later."

# Instruction wrapped around every chat message; some models echo it back.
INSTRUCTION_PREFIX = "Reply briefly and helpfully to this message from a todo app user:"

SYSTEM_PROMPT = (
    "You are Jarvis, a friendly assistant living inside a personal todo app. "
    "Keep answers short (two or three sentences) and conversational."
)


@dataclass(frozen=True)
class GatewayResult:
    ok: bool
    text: str
    error: Optional[str] = None


def strip_instruction_echo(text: str, prefix: str = INSTRUCTION_PREFIX) -> str:
    cleaned = (text or "").strip()
    if cleaned.lower().startswith(prefix.lower()):
        cleaned = cleaned[len(prefix):].strip()
    return cleaned


class RemoteCompletionGateway:
    def __init__(
        self,
        api_key: Optional[str],
        llm_config: Optional[LLMConfig] = None,
        translation_config: Optional[TranslationConfig] = None,
        llm: Any = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key or None
        self.llm_config = llm_config or LLMConfig()
        self.translation_config = translation_config or TranslationConfig()
        self._llm = llm
        self._session = session

    @classmethod
    def from_settings(cls, settings: Settings) -> "RemoteCompletionGateway":
        return cls(
            api_key=settings.inference_api_key,
            llm_config=settings.llm,
            translation_config=settings.translation,
        )

    @property
    def enabled(self) -> bool:
        return self.api_key is not None

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def _chat_model(self):
        if self._llm is None:
            cfg = self.llm_config
            self._llm = ChatOpenAI(
                model=cfg.default_model,
                temperature=cfg.temperature,
                max_tokens=cfg.max_tokens,
                base_url=cfg.base_url,
                api_key=self.api_key,
                timeout=cfg.request_timeout,
                max_retries=0,
            )
        return self._llm

    def generate(self, prompt: str) -> GatewayResult:
        if not self.enabled:
            return GatewayResult(ok=False, text=NOT_CONFIGURED_REPLY, error="not_configured")

        chat_prompt = ChatPromptTemplate.from_messages([
            ("system", SYSTEM_PROMPT),
            ("user", "{instruction} {message}"),
        ])
        try:
            chain = chat_prompt | self._chat_model() | StrOutputParser()
            raw = chain.invoke({"instruction": INSTRUCTION_PREFIX, "message": prompt})
        except Exception as e:
            logger.warning(f"Generation request failed: {e}")
            return GatewayResult(ok=False, text=GENERATE_FALLBACK_REPLY, error=str(e))

        if not isinstance(raw, str):
            logger.error(f"Malformed generation response: {raw!r}")
            return GatewayResult(ok=False, text=GENERATE_FALLBACK_REPLY, error="malformed response")
        reply = strip_instruction_echo(raw)
        if not reply:
            logger.warning("Empty generation response")
            return GatewayResult(ok=False, text=GENERATE_FALLBACK_REPLY, error="empty response")
        return GatewayResult(ok=True, text=reply)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------
    def resolve_language(self, target_lang: Optional[str]) -> str:
        models = self.translation_config.models
        lang = (target_lang or "").strip().lower()
        return lang if lang in models else self.translation_config.default_language

    def model_for(self, target_lang: Optional[str]) -> str:
        return self.translation_config.models[self.resolve_language(target_lang)]

    def _http(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Accept": "application/json"})
        return self._session

    def translate(self, text: str, target_lang: Optional[str] = None) -> GatewayResult:
        if not self.enabled:
            return GatewayResult(ok=False, text=TRANSLATION_NOT_CONFIGURED, error="not_configured")

        model_id = self.model_for(target_lang)
        url = f"{self.translation_config.base_url.rstrip('/')}/{model_id}"
        logger.info(f"[POST] Translating {len(text or '')} chars with {model_id}")
        try:
            resp = self._http().post(
                url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={"inputs": text},
                timeout=self.translation_config.request_timeout,
            )
            resp.raise_for_status()
            data = resp.json()
            translated = data[0]["translation_text"]
        except requests.RequestException as e:
            logger.warning(f"Translation request failed: {e}")
            return GatewayResult(ok=False, text=TRANSLATION_FALLBACK, error=str(e))
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Malformed translation response from {model_id}: {e}")
            return GatewayResult(ok=False, text=TRANSLATION_FALLBACK, error="malformed response")

        if not isinstance(translated, str) or not translated.strip():
            return GatewayResult(ok=False, text=TRANSLATION_FALLBACK, error="empty response")
        return GatewayResult(ok=True, text=translated.strip())
