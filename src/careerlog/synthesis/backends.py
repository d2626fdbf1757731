"""Generative achievement backends with per-model circuit breakers.

Each backend is called at most once per commit. Any failure (timeout,
non-success status, open circuit, empty completion) is reported as
``None`` so the synthesizer can fall through to pattern matching.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import litellm
from circuitbreaker import (  # pyright: ignore[reportUnknownVariableType]
    CircuitBreaker,
    CircuitBreakerError,
)

from careerlog.config import Settings
from careerlog.constants import (
    BACKEND_MAX_CHARS,
    BACKEND_MAX_OUTPUT_TOKENS,
    BACKEND_TEMPERATURE,
    CB_BACKEND_FAILURE_THRESHOLD,
    CB_BACKEND_RECOVERY_TIMEOUT,
    Confidence,
)
from careerlog.prompts import ACHIEVEMENT_SYSTEM_PROMPT
from careerlog.resilience.errors import describe_error

logger = logging.getLogger(__name__)

# litellm stubs have partially unknown types; typed alias
if TYPE_CHECKING:
    _acompletion: Callable[..., Coroutine[Any, Any, Any]]
else:
    _acompletion = litellm.acompletion


# Per-model circuit breaker registry
_breaker_registry: dict[str, CircuitBreaker] = {}  # pyright: ignore[reportUnknownVariableType]


def _get_breaker(model: str) -> CircuitBreaker:  # pyright: ignore[reportUnknownParameterType]
    """Get or create a circuit breaker for the given model."""
    if model not in _breaker_registry:
        _breaker_registry[model] = CircuitBreaker(  # pyright: ignore[reportUnknownMemberType]
            failure_threshold=CB_BACKEND_FAILURE_THRESHOLD,
            recovery_timeout=CB_BACKEND_RECOVERY_TIMEOUT,
            expected_exception=Exception,
            name=f"backend_{model}",
        )
    return _breaker_registry[model]


async def guarded_completion(
    model: str,
    messages: list[dict[str, str]],
    timeout: float,
    **extra: Any,
) -> str:
    """Circuit-breaker-protected, time-bounded completion. No retries."""
    breaker = _get_breaker(model)
    if breaker.opened:  # pyright: ignore[reportUnknownMemberType]
        raise CircuitBreakerError(breaker)  # pyright: ignore[reportUnknownArgumentType]
    with breaker:  # pyright: ignore[reportUnknownMemberType]
        response: Any = await asyncio.wait_for(
            _acompletion(
                model=model,
                messages=messages,
                timeout=timeout,
                max_tokens=BACKEND_MAX_OUTPUT_TOKENS,
                temperature=BACKEND_TEMPERATURE,
                **extra,
            ),
            timeout=timeout,
        )
    return str(response.choices[0].message.content or "")


@dataclass(frozen=True)
class GenerativeBackend:
    """One configured text generator (remote API or local service)."""

    name: str
    model: str
    confidence: float
    data_local: bool
    timeout: float
    api_key: str | None = None
    api_base: str | None = None

    async def generate(self, prompt: str) -> str | None:
        """Return a stripped statement of at most 150 chars, or None."""
        messages = [
            {"role": "system", "content": ACHIEVEMENT_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        extra: dict[str, Any] = {}
        if self.api_key:
            extra["api_key"] = self.api_key
        if self.api_base:
            extra["api_base"] = self.api_base

        try:
            content = await guarded_completion(
                self.model, messages, self.timeout, **extra
            )
        except CircuitBreakerError:
            logger.warning(
                "event=backend_circuit_open backend=%s model=%s",
                self.name,
                self.model,
            )
            return None
        except Exception as exc:
            logger.warning(
                "event=backend_error backend=%s model=%s %s",
                self.name,
                self.model,
                describe_error(exc),
            )
            return None

        text = content.strip()[:BACKEND_MAX_CHARS]
        if not text:
            logger.debug("event=backend_empty backend=%s", self.name)
            return None
        return text


def build_backends(settings: Settings) -> list[GenerativeBackend]:
    """Configured backends in call order: remote first, then local.

    Enterprise mode yields no backends regardless of credentials.
    """
    if settings.enterprise:
        return []
    backends: list[GenerativeBackend] = []
    if settings.openai_api_key:
        backends.append(
            GenerativeBackend(
                name="remote",
                model=settings.remote_model,
                confidence=Confidence.REMOTE_BACKEND,
                data_local=False,
                timeout=settings.request_timeout_seconds,
                api_key=settings.openai_api_key,
            )
        )
    if settings.use_local_llm:
        backends.append(
            GenerativeBackend(
                name="local",
                model=settings.local_model,
                confidence=Confidence.LOCAL_BACKEND,
                data_local=True,
                timeout=settings.request_timeout_seconds,
                api_base=settings.ollama_base_url,
            )
        )
    return backends
