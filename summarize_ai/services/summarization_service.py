"""PDF summarization service backed by OpenAI-compatible chat APIs (Groq, OpenRouter)."""

from typing import Dict, Optional

import httpx

from summarize_ai.core.config import settings
from summarize_ai.core.logging import logger
from summarize_ai.schemas import SummaryLength

# Platform configurations
PLATFORMS: Dict[str, Dict] = {
    "groq": {
        "url": "https://api.groq.com/openai/v1/chat/completions",
        "key_setting": "GROQ_API_KEY",
        "model_setting": "GROQ_MODEL",
    },
    "openrouter": {
        "url": "https://openrouter.ai/api/v1/chat/completions",
        "key_setting": "OPENROUTER_API_KEY",
        "model_setting": "OPENROUTER_MODEL",
    },
}

LENGTH_INSTRUCTIONS: Dict[SummaryLength, str] = {
    SummaryLength.SHORT: "Provide a brief summary in 2-3 sentences.",
    SummaryLength.MEDIUM: "Provide a comprehensive summary in 1-2 paragraphs.",
    SummaryLength.LONG: (
        "Provide a detailed summary covering all key points, "
        "organized with bullet points and sections."
    ),
}

TRUNCATION_MARKER = "\n\n[Text truncated due to length...]"
EMPTY_SUMMARY_FALLBACK = "Unable to generate summary."


class CompletionError(RuntimeError):
    """Raised when the completion API call fails."""


class SummarizationService:
    """Service for summarizing text via LLM APIs (Groq, OpenRouter, etc.)."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    def _get_platform_config(self, platform: str) -> dict:
        """Get URL, API key, and model for the given platform."""
        if platform not in PLATFORMS:
            raise ValueError(
                f"Unknown platform '{platform}'. "
                f"Supported: {', '.join(PLATFORMS.keys())}"
            )

        config = PLATFORMS[platform]
        api_key = getattr(settings, config["key_setting"], None)
        model = getattr(settings, config["model_setting"])

        if not api_key:
            raise ValueError(
                f"{config['key_setting']} is not set. "
                f"Add it to your .env file."
            )

        return {
            "url": config["url"],
            "api_key": api_key,
            "model": model,
        }

    @staticmethod
    def prepare_text(text: str, limit: Optional[int] = None) -> str:
        """Hard-cut the document to the prompt budget, marking the cut."""
        limit = limit or settings.PROMPT_CHAR_LIMIT
        if len(text) > limit:
            return text[:limit] + TRUNCATION_MARKER
        return text

    @staticmethod
    def system_prompt(length: SummaryLength) -> str:
        instruction = LENGTH_INSTRUCTIONS.get(length, LENGTH_INSTRUCTIONS[SummaryLength.MEDIUM])
        return (
            f"You are an expert document summarizer. {instruction} "
            "Use clear, professional language. Format your response in markdown."
        )

    def _build_payload(self, text: str, model: str, length: SummaryLength) -> dict:
        """Build the chat completion request payload."""
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": self.system_prompt(length)},
                {"role": "user", "content": f"Please summarize the following document:\n\n{text}"},
            ],
            "temperature": settings.SUMMARY_TEMPERATURE,
            "max_tokens": settings.SUMMARY_MAX_TOKENS,
        }

    async def _call_llm(self, url: str, api_key: str, payload: dict) -> str:
        """Call an OpenAI-compatible chat completions API once."""
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=settings.LLM_TIMEOUT_SECONDS, transport=self._transport
            ) as client:
                response = await client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"LLM API request failed: {e}")
            raise CompletionError(f"LLM API request failed: {e}") from e

        if response.status_code != 200:
            error_detail = response.text
            logger.error(f"LLM API error ({response.status_code}): {error_detail}")
            raise CompletionError(
                f"LLM API returned {response.status_code}: {error_detail}"
            )

        choices = response.json().get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""

    async def summarize(
        self,
        text: str,
        length: SummaryLength = SummaryLength.MEDIUM,
        platform: Optional[str] = None,
    ) -> str:
        """
        Summarize document text in a single completion call.

        Args:
            text: The full extracted document text. It is cut to the prompt
                budget before sending.
            length: Requested summary length mode.
            platform: 'groq' or 'openrouter'. Defaults to DEFAULT_LLM_PLATFORM.
        """
        platform = platform or settings.DEFAULT_LLM_PLATFORM
        config = self._get_platform_config(platform)

        prompt_text = self.prepare_text(text)
        logger.info(
            f"Summarizing via {platform} ({config['model']}): "
            f"{len(text)} chars, {len(prompt_text)} sent, length={length.value}"
        )

        payload = self._build_payload(prompt_text, model=config["model"], length=length)
        summary = await self._call_llm(config["url"], config["api_key"], payload)

        return summary.strip() or EMPTY_SUMMARY_FALLBACK


# Singleton instance
summarization_service = SummarizationService()
