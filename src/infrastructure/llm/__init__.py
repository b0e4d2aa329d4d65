"""
LLM Client Infrastructure
==========================

Wrapper for OpenAI-compatible completion providers (OpenRouter, DeepSeek)
providing a clean interface for LLM operations.

This module abstracts the LLM client implementation following the
Dependency Inversion Principle - the application layer depends on
abstractions, not concrete implementations.
"""

import time
from typing import List, Optional, Any
from abc import ABC, abstractmethod

from openai import AsyncOpenAI

from src.config import settings
from src.core import LLMException, ConfigurationException
from src.shared.infrastructure.grafana import get_grafana_exporter


class ChatCompletionResult:
    """Result of a chat completion."""

    def __init__(
        self,
        content: str,
        model: str,
        prompt_tokens: int,
        completion_tokens: int,
        latency_ms: int
    ):
        self.content = content
        self.model = model
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens
        self.total_tokens = prompt_tokens + completion_tokens
        self.latency_ms = latency_ms


class ILLMClient(ABC):
    """
    Interface for LLM client operations.

    Only chat completion is needed by the application.
    """

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.0,
        max_tokens: int = 10,
        operation: str = "chat_completion",
        extra_body: Optional[dict] = None
    ) -> ChatCompletionResult:
        """Generate chat completion."""

    async def close(self) -> None:
        """Release network resources."""


class OpenAICompatibleLLMClient(ILLMClient):
    """
    AsyncOpenAI client pointed at any OpenAI-compatible base URL.

    Retries are disabled; a failed call is reported once.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Any = None
    ):
        self._api_key = api_key or settings.classifier_api_key
        if not self._api_key and client is None:
            raise ConfigurationException("Classifier API key not configured")

        self._model = model or settings.classifier_model
        self._client = client or AsyncOpenAI(
            api_key=self._api_key,
            base_url=base_url or settings.classifier_base_url,
            timeout=timeout or settings.classifier_timeout_seconds,
            max_retries=0,
            default_headers={
                "HTTP-Referer": settings.classifier_referer,
                "X-Title": settings.classifier_app_title,
            },
        )

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.0,
        max_tokens: int = 10,
        operation: str = "chat_completion",
        extra_body: Optional[dict] = None
    ) -> ChatCompletionResult:
        """
        Generate a chat completion.

        Args:
            messages: List of message dicts with 'role' and 'content'
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            operation: Operation type for metrics (classification, ...)
            extra_body: Provider specific request fields

        Returns:
            ChatCompletionResult with generated text

        Raises:
            LLMException: If the call fails or the reply has no text
        """
        start_time = time.perf_counter()

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                extra_body=extra_body
            )
        except Exception as e:
            raise LLMException(f"Chat completion failed: {str(e)}")

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        if not response.choices:
            raise LLMException("Chat completion returned no choices")

        content = response.choices[0].message.content
        if content is None:
            raise LLMException("Chat completion returned empty content")

        usage = getattr(response, "usage", None)
        prompt_tokens = getattr(usage, "prompt_tokens", 0) or 0
        completion_tokens = getattr(usage, "completion_tokens", 0) or 0

        result = ChatCompletionResult(
            content=content,
            model=self._model,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            latency_ms=latency_ms
        )

        exporter = get_grafana_exporter()
        if exporter and exporter.is_enabled():
            await exporter.export_llm_metrics(
                model=self._model,
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                latency_ms=latency_ms,
                operation=operation
            )

        return result

    async def close(self) -> None:
        await self._client.close()


class MockLLMClient(ILLMClient):
    """
    Mock LLM client for local development and tests.

    Returns a fixed reply without calling external APIs.
    """

    def __init__(self, reply: str = "Media"):
        self.reply = reply
        self.calls: List[List[dict]] = []

    @property
    def model(self) -> str:
        return "mock-model"

    async def chat_completion(
        self,
        messages: List[dict],
        temperature: float = 0.0,
        max_tokens: int = 10,
        operation: str = "chat_completion",
        extra_body: Optional[dict] = None
    ) -> ChatCompletionResult:
        self.calls.append(messages)
        return ChatCompletionResult(
            content=self.reply,
            model=self.model,
            prompt_tokens=0,
            completion_tokens=len(self.reply.split()),
            latency_ms=0
        )


def create_llm_client() -> Optional[ILLMClient]:
    """
    Build the configured client.

    Returns None when no API key is configured; callers fall back to the
    default priority in that case.
    """
    if settings.mock_llm:
        return MockLLMClient()
    if not settings.classifier_api_key:
        return None
    return OpenAICompatibleLLMClient()
