"""LLM-backed document categorizer.

Builds one taxonomy-aware payload per call, sends it through an
IInferenceClient under a RetryPolicy, and parses the generated text into a
CategorizationResult. Categorization is best-effort enrichment: every
failure is logged and degrades to the taxonomy's fallback result, so
ingestion is never blocked by the inference service.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, ValidationError

from docindex.application.interfaces.services import IInferenceClient
from docindex.application.services.categorization_prompt import build_payload
from docindex.application.services.retry_policy import RetryPolicy
from docindex.domain.exceptions import (
    CategorizationError,
    FailureKind,
    MalformedResponseError,
)
from docindex.domain.taxonomy import CategorizationResult, Taxonomy, ValidationPolicy
from docindex.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from docindex.core.config import Settings

logger = get_logger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class CategorizerConfig:
    """Everything that shapes a categorization call, in one injectable value."""

    taxonomy: Taxonomy = field(default_factory=Taxonomy)
    max_content_chars: int = 4000
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    validation_policy: ValidationPolicy = ValidationPolicy.PERMISSIVE

    def __post_init__(self) -> None:
        if self.max_content_chars < 1:
            raise ValueError("max_content_chars must be >= 1")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "CategorizerConfig":
        """Build config from application settings."""
        return cls(
            taxonomy=settings.build_taxonomy(),
            max_content_chars=settings.categorization_max_content_chars,
            retry_policy=RetryPolicy(
                max_attempts=settings.categorization_max_attempts,
                base_delay=settings.categorization_backoff_base_seconds,
                multiplier=settings.categorization_backoff_multiplier,
            ),
            validation_policy=settings.categorization_validation_policy,
        )


class _GeneratedCategorization(BaseModel):
    """Shape the generated text must have: an object with three string fields."""

    model_config = ConfigDict(strict=True, extra="ignore")

    topic: str
    project: str
    team: str


def parse_generated_text(text: str) -> CategorizationResult:
    """Parse the model's generated text into a CategorizationResult.

    Raises:
        MalformedResponseError: Text is not JSON, not an object, or lacks one
            of the three string fields.
    """
    try:
        parsed = _GeneratedCategorization.model_validate_json(text)
    except ValidationError as e:
        raise MalformedResponseError(
            f"generated text is not a categorization object ({e.error_count()} errors)",
            generated_text=text,
        ) from e
    return CategorizationResult(topic=parsed.topic, project=parsed.project, team=parsed.team)


class Categorizer:
    """Classify document text into the configured taxonomy.

    Contract: categorize() always returns a complete CategorizationResult and
    never raises (task cancellation excepted). Retries happen only for
    transport failures; an HTTP error status or an unusable generated text
    ends the call with the fallback result.
    """

    def __init__(
        self,
        config: CategorizerConfig,
        client: IInferenceClient,
        *,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self.config = config
        self.client = client
        self._sleep = sleep
        self._default = config.taxonomy.default_result()

    def truncate(self, content: str | None) -> str:
        """Deterministic prefix sent to the model (code points, never splits a character)."""
        return (content or "")[: self.config.max_content_chars]

    async def categorize(self, content: str) -> CategorizationResult:
        """Return the categorization for content, or the fallback result."""
        payload = build_payload(self.config.taxonomy, self.truncate(content))
        policy = self.config.retry_policy

        for attempt in range(policy.max_attempts):
            try:
                generated = await self.client.generate(payload)
                result = parse_generated_text(generated)
            except CategorizationError as e:
                decision = policy.decide(attempt, e.kind)
                if decision.retry:
                    logger.warning(
                        "Categorization attempt %d/%d failed (%s), retrying in %.1fs",
                        attempt + 1,
                        policy.max_attempts,
                        e.error_code,
                        decision.delay,
                    )
                    await self._sleep(decision.delay)
                    continue
                if e.kind is FailureKind.TRANSPORT:
                    logger.error(
                        "Categorization gave up after %d attempts: %s",
                        attempt + 1,
                        e.message,
                    )
                else:
                    logger.error(
                        "Categorization failed on attempt %d, not retrying: %s",
                        attempt + 1,
                        e.message,
                    )
                return self._default
            except Exception:
                logger.exception("Unexpected error during categorization")
                return self._default

            return self._apply_validation_policy(result)

        return self._default

    def _apply_validation_policy(self, result: CategorizationResult) -> CategorizationResult:
        taxonomy = self.config.taxonomy
        if taxonomy.contains(result):
            logger.info("Categorization result: %s", result.to_dict())
            return result
        if self.config.validation_policy is ValidationPolicy.STRICT:
            coerced = taxonomy.coerce(result)
            logger.warning(
                "Model returned off-taxonomy values %s; coerced to %s",
                result.to_dict(),
                coerced.to_dict(),
            )
            return coerced
        logger.info("Categorization result (off-taxonomy values kept): %s", result.to_dict())
        return result
