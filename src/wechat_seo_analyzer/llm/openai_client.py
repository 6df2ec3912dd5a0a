from __future__ import annotations

import importlib
import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, cast

from ..config import AISettings

logger = logging.getLogger(__name__)

OpenAI: Callable[..., Any] | None = None


@dataclass(slots=True)
class ChatMetadata:
    """Describes the analysis a request belongs to, used for logging."""

    analysis_type: str
    text_length: int = 0


class OpenAIChatClient:
    """Chat-completions client for OpenAI-compatible endpoints with retries."""

    def __init__(self, settings: AISettings, api_key: str) -> None:
        if not api_key:
            raise ValueError("An API key is required when AI enhancement is enabled.")
        self._settings = settings
        self._api_key = api_key
        self._client_factory: Callable[..., Any] = _load_openai_factory()
        self._client: Any | None = None
        self._semaphore: threading.BoundedSemaphore | None = None
        if settings.parallel_requests > 0:
            self._semaphore = threading.BoundedSemaphore(settings.parallel_requests)
        self._max_attempts = 3

    @property
    def settings(self) -> AISettings:
        return self._settings

    def complete(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        metadata: ChatMetadata,
    ) -> str:
        """Send the chat request and return the assistant message text."""
        attempt = 0
        last_error: Exception | None = None
        while attempt < self._max_attempts:
            attempt += 1
            try:
                with self._acquire_slot():
                    client = self._ensure_client()
                    response: Any = client.chat.completions.create(
                        model=self._settings.model,
                        messages=[
                            {"role": "system", "content": system_prompt},
                            {"role": "user", "content": user_prompt},
                        ],
                        temperature=self._settings.temperature,
                        max_tokens=self._settings.max_output_tokens,
                        timeout=self._settings.request_timeout,
                    )
                text = self._extract_text(response)
                logger.debug(
                    "Chat completion succeeded for %s analysis (%s chars in)",
                    metadata.analysis_type,
                    metadata.text_length,
                )
                return text
            except Exception as exc:
                last_error = exc
                logger.warning(
                    "Chat completion failed for %s analysis (attempt %s/%s): %s",
                    metadata.analysis_type,
                    attempt,
                    self._max_attempts,
                    exc,
                )
                if attempt >= self._max_attempts:
                    break
                time.sleep(min(2 ** (attempt - 1), 5))
        raise RuntimeError("Chat completion failed after retries.") from last_error

    def _ensure_client(self) -> Any:
        if self._client is None:
            self._client = self._client_factory(
                api_key=self._api_key,
                base_url=self._settings.base_url,
                organization=self._settings.organization,
            )
        return self._client

    @contextmanager
    def _acquire_slot(self) -> Iterator[None]:
        if self._semaphore is None:
            yield
            return
        self._semaphore.acquire()
        try:
            yield
        finally:
            self._semaphore.release()

    @staticmethod
    def _extract_text(response: Any) -> str:
        choices = getattr(response, "choices", None)
        if not choices:
            raise RuntimeError("Chat response is missing choices.")
        first = OpenAIChatClient._materialize_item(choices[0])
        message = first.get("message")
        if not message:
            raise RuntimeError("Chat response choice has no message.")
        text = OpenAIChatClient._materialize_item(message).get("content")
        if not text:
            raise RuntimeError("Chat response message missing content.")
        return text

    @staticmethod
    def _materialize_item(item: Any) -> dict[str, Any]:
        if isinstance(item, dict):
            return cast(dict[str, Any], item)
        if hasattr(item, "model_dump"):
            dumpable: Any = item
            raw_dump: dict[str, Any] = dumpable.model_dump()
            return raw_dump
        if hasattr(item, "__dict__"):
            dumpable: Any = item
            raw_dict: dict[str, Any] = dict(dumpable.__dict__)
            return raw_dict
        raise RuntimeError("Unexpected chat response format.")


def _load_openai_factory() -> Callable[..., Any]:
    global OpenAI
    if OpenAI is not None:
        return OpenAI
    try:  # pragma: no cover - import guard
        module = importlib.import_module("openai")
    except Exception as exc:  # pragma: no cover - handled at runtime
        raise RuntimeError(
            "openai package is not installed. Install extras via 'pip install .[llm-openai]'."
        ) from exc
    openai_cls = getattr(module, "OpenAI", None)
    if openai_cls is None:  # pragma: no cover - defensive
        raise RuntimeError(
            "openai.OpenAI client class is unavailable in this environment."
        )
    OpenAI = cast(Callable[..., Any], openai_cls)
    return OpenAI
