"""Language detection and translation to the target language.

The pipeline only relies on the ``TranslationGateway`` protocol. The Google
Cloud Translation adapter below is the production implementation: language
detection runs locally with langdetect, translation is one REST call per chunk.
"""

import html
from typing import Protocol, runtime_checkable

import aiohttp
from langdetect import DetectorFactory, LangDetectException, detect
from loguru import logger

from newsfeed.constants import DEFAULT_TARGET_LANGUAGE, TRANSLATION_CHUNK_LENGTH, UNKNOWN_LANGUAGE
from newsfeed.errors import ConfigurationError, TranslationError
from newsfeed.models.config import TranslationConfig

DetectorFactory.seed = 0

# Letters that only occur in the target alphabet. A text containing one of
# them is accepted even when langdetect is unsure (short titles).
TARGET_ALPHABET_MARKERS: dict[str, frozenset[str]] = {
    "tr": frozenset("ğĞşŞıİ"),
}

_LANGUAGE_ALIASES = {"zh-cn": "zh-CN", "zh-tw": "zh-TW"}


@runtime_checkable
class TranslationGateway(Protocol):
    """What the pipeline needs from a translation service."""

    target_language: str

    def detect_language(self, text: str) -> str: ...

    def is_target_language(self, text: str) -> bool: ...

    async def translate(self, text: str, source_language: str | None = None) -> str: ...


def detect_language(text: str) -> str:
    """Return an ISO language tag for ``text``, or ``"unknown"``."""
    if not text or not text.strip():
        return UNKNOWN_LANGUAGE
    try:
        lang = detect(text)
    except LangDetectException:
        return UNKNOWN_LANGUAGE
    return _LANGUAGE_ALIASES.get(lang, lang)


def is_language(text: str, language: str) -> bool:
    """Whether ``text`` reads as ``language``."""
    if not text or not text.strip():
        return False
    markers = TARGET_ALPHABET_MARKERS.get(language)
    if markers and any(ch in markers for ch in text):
        return True
    return detect_language(text) == language


def split_text(text: str, max_len: int = TRANSLATION_CHUNK_LENGTH) -> list[str]:
    """Split long text into chunks, preferring to cut after a full stop."""
    parts = []
    while len(text) > max_len:
        cut = text[:max_len].rsplit(".", 1)[0]
        if not cut:
            cut = text[:max_len]
        elif len(cut) < max_len:
            cut += "."
        parts.append(cut)
        text = text[len(cut) :]
    if text.strip():
        parts.append(text)
    return parts


class GoogleTranslationGateway:
    """Translation gateway backed by the Google Cloud Translation v2 REST API."""

    def __init__(
        self,
        config: TranslationConfig,
        target_language: str = DEFAULT_TARGET_LANGUAGE,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            config: Translation settings (API key, endpoint, timeout)
            target_language: Language every translation goes to
            session: Shared HTTP session; one is created per call when omitted
        """
        self.config = config
        self.target_language = target_language
        self._session = session

    def detect_language(self, text: str) -> str:
        return detect_language(text)

    def is_target_language(self, text: str) -> bool:
        return is_language(text, self.target_language)

    async def translate(self, text: str, source_language: str | None = None) -> str:
        """
        Translate ``text`` to the target language.

        Args:
            text: Text to translate
            source_language: Optional hint; detected by the service when omitted

        Returns:
            Translated text with HTML entities unescaped

        Raises:
            ConfigurationError: No API key configured
            TranslationError: HTTP failure or unexpected payload
        """
        if not text or not text.strip():
            return text

        if not self.config.api_key:
            raise ConfigurationError("Translation API key is not configured")

        if source_language == UNKNOWN_LANGUAGE:
            source_language = None

        results = []
        for chunk in split_text(text.strip()):
            results.append(await self._translate_chunk(chunk, source_language))

        return " ".join(results).strip()

    async def _translate_chunk(self, chunk: str, source_language: str | None) -> str:
        payload: dict[str, str] = {"q": chunk, "target": self.target_language, "format": "text"}
        if source_language:
            payload["source"] = source_language

        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
        params = {"key": self.config.api_key or ""}

        try:
            if self._session is not None:
                async with self._session.post(
                    self.config.base_url, params=params, json=payload, timeout=timeout
                ) as response:
                    response.raise_for_status()
                    data = await response.json(content_type=None)
            else:
                async with (
                    aiohttp.ClientSession(timeout=timeout) as session,
                    session.post(self.config.base_url, params=params, json=payload) as response,
                ):
                    response.raise_for_status()
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as e:
            raise TranslationError(f"Translation request failed: {e}") from e
        except ValueError as e:
            raise TranslationError(f"Translation response is not JSON: {e}") from e

        try:
            translated = data["data"]["translations"][0]["translatedText"]
        except (KeyError, IndexError, TypeError) as e:
            raise TranslationError(f"Unexpected translation payload: {data!r:.200}") from e

        logger.debug("Translated chunk", chars=len(chunk), source=source_language or "auto")
        return html.unescape(translated)
