import logging
import os
from typing import Optional, Protocol, runtime_checkable

import litellm

from ..core.config import Settings, get_settings

logger = logging.getLogger(__name__)


@runtime_checkable
class TextGenerator(Protocol):
    """Generative-text capability: one prompt pair in, raw text out."""

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        ...


class LLMService:
    """Single-shot text generation using LiteLLM"""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or get_settings()
        self.model = settings.llm_model
        self.max_tokens = settings.llm_max_tokens
        self.temperature = settings.llm_temperature
        self.timeout = settings.llm_timeout_seconds

        # Set LiteLLM configuration
        litellm.set_verbose = os.getenv("LLM_VERBOSE", "false").lower() == "true"

        # Configure API keys from settings
        self._setup_api_keys(settings)

    def _setup_api_keys(self, settings: Settings) -> None:
        """Setup API keys for the LLM providers LiteLLM reads from the environment"""
        if settings.openai_api_key:
            os.environ["OPENAI_API_KEY"] = settings.openai_api_key

        if settings.anthropic_api_key:
            os.environ["ANTHROPIC_API_KEY"] = settings.anthropic_api_key

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Send a system + user prompt and return the model's raw text.

        Raises whatever LiteLLM raises; callers decide how to degrade.
        """
        logger.info(f"Calling LLM API with model: {self.model}")
        response = await litellm.acompletion(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            timeout=self.timeout,
        )

        content = response.choices[0].message.content or ""
        usage = getattr(response, "usage", None)
        logger.info(
            f"LLM response received: {len(content)} chars, "
            f"{usage.total_tokens if usage else 0} tokens"
        )
        return content


# Global service instance
_llm_service: Optional[LLMService] = None


def get_llm_service() -> LLMService:
    """Get the global LLM service instance"""
    global _llm_service
    if _llm_service is None:
        _llm_service = LLMService()
    return _llm_service
