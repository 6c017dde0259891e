"""
Structured response recovery.

Turns raw model text into a Shaped Result (a dict carrying every required
field), in three steps:

1. Strict decode of the trimmed text
2. Textual repair (json_repair.repair_json_text), then decode again
3. Fallback record from the caller's builder, computed from input stats

A result is always produced; decoding errors never reach the caller.
"""

import json
from functools import lru_cache
from typing import Any, Callable, Optional, Sequence

import structlog
from jsonschema import Draft7Validator

from bondsense.models.enums import AnalysisVariant, RecoveryPath
from bondsense.monitoring.metrics import response_recovery_total
from bondsense.recovery.exceptions import JSONParseError, MissingFieldsError, RecoveryError
from bondsense.recovery.json_repair import has_object_framing, repair_json_text


logger = structlog.get_logger(__name__)

FallbackBuilder = Callable[[], dict[str, Any]]


@lru_cache(maxsize=32)
def required_fields_validator(required_fields: tuple[str, ...]) -> Draft7Validator:
    """
    Validator accepting objects whose required fields are present and non-null.

    Cached per field tuple; the schema only depends on the field names.
    """
    schema = {
        "type": "object",
        "required": list(required_fields),
        "properties": {name: {"not": {"type": "null"}} for name in required_fields},
    }
    Draft7Validator.check_schema(schema)
    return Draft7Validator(schema)


def decode_object(text: str) -> dict[str, Any]:
    """
    Decode text as a JSON object.

    Raises:
        JSONParseError: Empty text, invalid or too deeply nested JSON, or a
            non-object document
    """
    if not text:
        raise JSONParseError("Response text is empty", raw_content=text, parse_error="Empty content")

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise JSONParseError(
            f"Failed to parse response as JSON: {e.msg}",
            raw_content=text,
            parse_error=f"{e.msg} at line {e.lineno} col {e.colno}",
        ) from e
    except RecursionError as e:
        raise JSONParseError(
            "Failed to parse response as JSON: nesting too deep",
            raw_content=text,
            parse_error="Nesting too deep",
        ) from e

    if not isinstance(parsed, dict):
        raise JSONParseError(
            f"Response is not a JSON object (got {type(parsed).__name__})",
            raw_content=text,
            parse_error=f"Expected dict, got {type(parsed).__name__}",
        )
    return parsed


def check_required_fields(data: dict[str, Any], required_fields: Sequence[str]) -> None:
    """
    Raises:
        MissingFieldsError: A required field is absent or null
    """
    validator = required_fields_validator(tuple(required_fields))
    if validator.is_valid(data):
        return
    raise MissingFieldsError([name for name in required_fields if data.get(name) is None])


def decode_shaped(text: str, required_fields: Sequence[str]) -> dict[str, Any]:
    data = decode_object(text)
    check_required_fields(data, required_fields)
    return data


class ResponseRecoverer:
    """
    Best-effort decoder for model output.

    Stateless; one instance can serve every request.
    """

    def recover_with_path(
        self,
        raw_text: str,
        required_fields: Sequence[str],
        fallback_builder: FallbackBuilder,
        variant: Optional[AnalysisVariant] = None,
    ) -> tuple[dict[str, Any], RecoveryPath]:
        """
        Recover a Shaped Result and report which step produced it.

        Args:
            raw_text: Untyped model output
            required_fields: Fields that must be present and non-null
            fallback_builder: Zero-argument callable building the fallback
                record from the request's own input statistics
            variant: Schema variant, used for logs and metrics only

        Returns:
            Tuple of (shaped_result, recovery_path)
        """
        variant_label = variant.value if variant else "unknown"
        text = (raw_text or "").strip()

        try:
            result = decode_shaped(text, required_fields)
            return self._done(result, RecoveryPath.STRICT, variant_label)
        except RecoveryError as e:
            logger.info(
                "Strict decode failed, attempting repair",
                variant=variant_label,
                error_type=type(e).__name__,
                error=e.message,
            )

        cleaned = repair_json_text(text)
        try:
            if not has_object_framing(cleaned):
                raise JSONParseError(
                    "Repaired text is not a JSON object",
                    raw_content=cleaned,
                    parse_error="Missing object framing",
                )
            result = decode_shaped(cleaned, required_fields)
            return self._done(result, RecoveryPath.REPAIRED, variant_label)
        except RecoveryError as e:
            logger.warning(
                "Response unrecoverable, using fallback",
                variant=variant_label,
                error_type=type(e).__name__,
                error=e.message,
                details=e.details,
                cleaned_text=cleaned[:500],
            )

        return self._done(fallback_builder(), RecoveryPath.FALLBACK, variant_label)

    def recover(
        self,
        raw_text: str,
        required_fields: Sequence[str],
        fallback_builder: FallbackBuilder,
        variant: Optional[AnalysisVariant] = None,
    ) -> dict[str, Any]:
        """Recover a Shaped Result; never raises for bad model output."""
        result, _ = self.recover_with_path(raw_text, required_fields, fallback_builder, variant)
        return result

    @staticmethod
    def _done(
        result: dict[str, Any], path: RecoveryPath, variant_label: str
    ) -> tuple[dict[str, Any], RecoveryPath]:
        response_recovery_total.labels(variant=variant_label, path=path.value).inc()
        logger.debug("Shaped result recovered", variant=variant_label, path=path.value)
        return result, path
