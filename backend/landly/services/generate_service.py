"""
Generation pipeline: prompt -> AI collaborator -> validator/normalizer.
"""
import logging
import time

from landly.exceptions import GenerationError, SchemaError
from landly.schemas import GenerationResult
from landly.services.ai_client import AIClient
from landly.services.page_schema_validator import PageSchemaValidator

logger = logging.getLogger(__name__)


class GenerateService:
    def __init__(self, ai_client: AIClient, validator: PageSchemaValidator):
        self.ai_client = ai_client
        self.validator = validator

    def generate(self, prompt: str, payment_url: str = "") -> GenerationResult:
        """
        Ask the AI collaborator for a schema and normalize it.
        AI failures become GenerationError; schema errors propagate unchanged and
        end this generation attempt (no retry here).
        """
        started = time.monotonic()
        try:
            raw = self.ai_client.generate_landing_schema(prompt, payment_url)
        except Exception as exc:
            logger.error("AI schema generation failed", exc_info=True)
            raise GenerationError(
                f"failed to generate schema: {exc}", provider=getattr(self.ai_client, "provider", None)
            ) from exc

        try:
            result = self.validator.validate(raw)
        except SchemaError as exc:
            logger.warning(
                f"Generated schema rejected: {exc.error_code} - {exc.message}",
                extra={"stage": "validate"},
            )
            raise

        logger.info(
            "Landing schema generated",
            extra={
                "fixes": result.auto_fixes,
                "duration_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return GenerationResult(schema_json=result.normalized, auto_fixes=result.auto_fixes)
