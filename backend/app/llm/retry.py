"""Capped retry around completion + parse.

One attempt is: call the completion client, then run the caller's ``parse``
function (extraction and schema validation) on the text. Provider failures,
unparsable completions and schema mismatches are retried with jitter up to
``retry_count`` extra attempts. The last error is re-raised unchanged so the
request handler can map it to a response.
"""

import asyncio
import random
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from backend.app.config import Settings
from backend.app.errors import ProviderError, SchemaMismatchError, UnparsableCompletionError
from backend.app.llm.client import CompletionClient
from backend.app.utils.logging import StructuredCompletionLogger
from backend.app.utils.metrics import PrometheusCompletionMetrics

T = TypeVar("T")

RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    ProviderError,
    UnparsableCompletionError,
    SchemaMismatchError,
)


@dataclass(frozen=True)
class CompletionRequest:
    """A single prompt and its sampling parameters."""

    operation: str
    messages: list[dict[str, str]]
    temperature: float | None = None
    max_tokens: int | None = None


@dataclass(frozen=True)
class RetryConfig:
    """Retry policy for completion calls."""

    retry_count: int = 2
    jitter_min_ms: int = 200
    jitter_max_ms: int = 500

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryConfig":
        """Build the retry policy from application settings."""
        return cls(
            retry_count=settings.completion_retry_count,
            jitter_min_ms=settings.retry_jitter_min_ms,
            jitter_max_ms=settings.retry_jitter_max_ms,
        )


def _reason(error: Exception) -> str:
    if isinstance(error, SchemaMismatchError):
        return "schema_mismatch"
    if isinstance(error, UnparsableCompletionError):
        return "unparsable"
    return "provider_error"


class CompletionExecutor:
    """Runs a completion and its parser with bounded retries."""

    def __init__(
        self,
        metrics: PrometheusCompletionMetrics | None = None,
        logger: StructuredCompletionLogger | None = None,
        sleep_fn: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize executor.

        Args:
            metrics: Metrics recorder (defaults to Prometheus)
            logger: Structured logger (defaults to StructuredCompletionLogger)
            sleep_fn: Injectable sleep function (default: asyncio.sleep)
        """
        self._metrics = metrics or PrometheusCompletionMetrics()
        self._logger = logger or StructuredCompletionLogger()
        self._sleep = sleep_fn or asyncio.sleep

    async def execute(
        self,
        client: CompletionClient,
        request: CompletionRequest,
        parse: Callable[[str], T],
        config: RetryConfig | None = None,
    ) -> T:
        """Complete and parse, retrying retryable failures.

        Args:
            client: Completion client
            request: Prompt and sampling parameters
            parse: Turns completion text into the result (may raise)
            config: Retry policy

        Returns:
            Parsed result of the first successful attempt

        Raises:
            ProviderError, UnparsableCompletionError, SchemaMismatchError:
                The last failure once all attempts are exhausted
        """
        config = config or RetryConfig()
        operation = request.operation

        for attempt in range(config.retry_count + 1):
            attempt_start = time.monotonic()
            try:
                content = await client.complete(
                    messages=request.messages,
                    temperature=request.temperature,
                    max_tokens=request.max_tokens,
                )
                result = parse(content)
            except RETRYABLE_ERRORS as e:
                elapsed_ms = (time.monotonic() - attempt_start) * 1000
                reason = _reason(e)
                self._metrics.record_latency(operation, "error", elapsed_ms)
                self._metrics.inc_error(operation, reason)
                self._logger.log_attempt(
                    operation, attempt + 1, "error", elapsed_ms, error_reason=reason
                )

                if attempt >= config.retry_count:
                    raise

                jitter_ms = random.uniform(config.jitter_min_ms, config.jitter_max_ms)
                await self._sleep(jitter_ms / 1000)
                continue

            elapsed_ms = (time.monotonic() - attempt_start) * 1000
            self._metrics.record_latency(operation, "success", elapsed_ms)
            self._logger.log_attempt(operation, attempt + 1, "success", elapsed_ms)
            return result

        # retry_count < 0 leaves no attempts
        raise ProviderError(f"No completion attempts allowed for {operation}")
