"""
Request Validation
==================

Validates the untyped argument bag of a tool call into ``ValidatedArguments``.
"""

from typing import Any, List, Mapping

from pydantic import ValidationError

from mcp_mermaid.config.logging import get_logger
from mcp_mermaid.models.schemas import ValidatedArguments, ValidationResult, Violation

logger = get_logger(__name__)


class RequestValidator:
    """Checks raw tool arguments against the mermaid tool schema."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(component="request_validator")

    def validate(self, raw: Any) -> ValidationResult:
        """
        Validate raw tool arguments.

        Optional fields sent as ``null`` are treated as absent and unknown
        keys are ignored. No default is injected for ``outputType``.

        Args:
            raw: Argument mapping as received from the caller

        Returns:
            ValidationResult holding either the arguments or the violations
        """
        if not isinstance(raw, Mapping):
            return ValidationResult(
                success=False,
                violations=[Violation(field="arguments", reason="Input should be an object")],
            )

        try:
            arguments = ValidatedArguments.model_validate(dict(raw))
        except ValidationError as e:
            violations = self._to_violations(e)
            self.logger.debug("Argument validation failed", violations=len(violations))
            return ValidationResult(success=False, violations=violations)

        return ValidationResult(success=True, arguments=arguments)

    @staticmethod
    def _to_violations(error: ValidationError) -> List[Violation]:
        violations: List[Violation] = []
        for item in error.errors():
            loc = item.get("loc") or ("arguments",)
            violations.append(
                Violation(field=".".join(str(part) for part in loc), reason=item.get("msg", ""))
            )
        return violations
