"""Base class for all agents calling the text-generation service"""
import asyncio
import logging
from typing import Optional
from openai import OpenAI, OpenAIError

from sitegen.core.config import settings
from sitegen.models.errors import ApplicationError, ErrorCode

logger = logging.getLogger(__name__)


class AgentError(Exception):
    """Base exception for agent errors"""
    pass


def create_client() -> OpenAI:
    """
    Build the OpenAI-compatible client for the configured endpoint.

    Raises:
        ApplicationError: CONFIGURATION_ERROR when no API key is configured
    """
    if not settings.openrouter_api_key:
        raise ApplicationError(
            ErrorCode.CONFIGURATION_ERROR,
            "Text-generation service is not configured",
            hint="Set OPENROUTER_API_KEY",
        )
    return OpenAI(api_key=settings.openrouter_api_key, base_url=settings.openrouter_base_url)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ``` / ```json / ```html fence the model may have added"""
    text = (text or "").strip()
    if text.startswith("```"):
        newline = text.find("\n")
        text = text[newline + 1:] if newline != -1 else text[3:]
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


class BaseAgent:
    """Base class for agents: one chat-completions call per prompt, with timeout"""

    def __init__(
        self,
        client: OpenAI,
        model: str,
        agent_name: str = "Agent",
        timeout: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        self.client = client
        self.model = model
        self.agent_name = agent_name
        self.timeout = timeout or settings.generation_timeout
        self.max_tokens = max_tokens or settings.max_output_tokens

    async def _call_model(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        model: Optional[str] = None,
    ) -> str:
        """
        Send one prompt and return the raw completion text.

        Args:
            prompt: User message
            system_prompt: Optional system message
            model: Model hint overriding the agent default

        Returns:
            Completion text (not yet cleaned)

        Raises:
            AgentError: On timeout, transport/API failure or empty completion
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        kwargs = {
            "model": model or self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
        }

        logger.info(
            f"[{self.agent_name}] Calling model | "
            f"model: {kwargs['model']} | "
            f"prompt_length: {len(prompt)} chars | "
            f"max_tokens: {self.max_tokens}"
        )

        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(
                    self.client.chat.completions.create,
                    **kwargs
                ),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            error_msg = f"Agent timeout after {self.timeout}s"
            logger.error(f"[{self.agent_name}] ✗ {error_msg}")
            raise AgentError(error_msg)
        except OpenAIError as e:
            error_msg = f"Text-generation request failed: {e}"
            logger.error(f"[{self.agent_name}] ✗ {error_msg}")
            raise AgentError(error_msg) from e

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content or not content.strip():
            logger.error(f"[{self.agent_name}] ✗ Empty completion | model: {kwargs['model']}")
            raise AgentError("Text-generation service returned an empty completion")

        usage = getattr(response, "usage", None)
        total_tokens = getattr(usage, "total_tokens", "n/a") if usage else "n/a"
        logger.info(
            f"[{self.agent_name}] ✓ Response received | "
            f"tokens: {total_tokens} | "
            f"length: {len(content)} chars"
        )
        return content
