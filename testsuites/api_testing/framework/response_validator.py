# ================================================================================
# Response Validator
# ================================================================================
#
# Rule-based validation of API payloads. Schemas are plain lists of
# ValidationRule objects (see schemas.py); every rule checks one field.
#
# Key Features:
#   - Field-level validation with detailed error messages
#   - Optional fields (validated only when present)
#   - Dot/index paths for nested fields ("data.items[0].id")
#   - Allure summary attachment per validation
#
# ================================================================================

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List

import allure

from autotest_tools.common.structured_logger import create_util_logger
from autotest_tools.report_tools.allure_utils import attach_text


log = create_util_logger("ResponseValidator")


class ValidationType(Enum):
    """Enumeration of supported validation types."""
    EQUAL = "equal"
    EXISTS = "exists"
    IS_NOT_NULL = "is_not_null"
    TYPE_CHECK = "type_check"
    ISO_DATE = "iso_date"
    LIST_OF = "list_of"
    REGEX_MATCH = "regex_match"
    LENGTH_GREATER_THAN = "length_greater_than"
    IN_LIST = "in_list"


@dataclass
class ValidationRule:
    """
    A single check applied to one response field.

    Attributes:
        field: Field path (dot notation, with optional [index] segments)
        validation_type: The type of validation to perform
        expected: Expected value, type name or pattern
        description: Human-readable description of the validation
        required: Whether the field must exist; optional fields pass when absent
    """
    field: str
    validation_type: ValidationType
    expected: Any = None
    description: str = ""
    required: bool = True


@dataclass
class ValidationResult:
    """Outcome of applying one rule."""
    passed: bool
    rule: ValidationRule
    actual_value: Any = None
    error_message: str = ""


# JSON type names -> Python types. "number" excludes bool (bool is an int subclass).
TYPE_MAP = {
    "string": str,
    "number": (int, float),
    "integer": int,
    "boolean": bool,
    "array": list,
    "object": dict,
    "null": type(None),
}


class ResponseValidator:
    """
    Validates parsed JSON payloads against rule lists.

    Example:
        validator = ResponseValidator()
        validator.validate_and_assert(body["data"], TRANSACTION_RULES)
    """

    def __init__(self):
        self._validation_handlers = {
            ValidationType.EQUAL: self._validate_equal,
            ValidationType.EXISTS: self._validate_exists,
            ValidationType.IS_NOT_NULL: self._validate_is_not_null,
            ValidationType.TYPE_CHECK: self._validate_type_check,
            ValidationType.ISO_DATE: self._validate_iso_date,
            ValidationType.LIST_OF: self._validate_list_of,
            ValidationType.REGEX_MATCH: self._validate_regex_match,
            ValidationType.LENGTH_GREATER_THAN: self._validate_length_greater_than,
            ValidationType.IN_LIST: self._validate_in_list,
        }

    @allure.step("Validating response against schema rules")
    def validate(
        self,
        response_data: Any,
        rules: List[ValidationRule],
    ) -> List[ValidationResult]:
        """
        Apply every rule to the payload.

        Args:
            response_data: Parsed JSON payload
            rules: Rules to apply

        Returns:
            One ValidationResult per rule, in rule order
        """
        results = []
        for rule in rules:
            result = self._apply_rule(response_data, rule)
            results.append(result)

            status_icon = "✅" if result.passed else "❌"
            log_msg = f"{status_icon} {rule.description or rule.field}: {result.passed}"
            if result.passed:
                log.debug(log_msg)
            else:
                log.warn(f"{log_msg} - {result.error_message}")

        self._attach_validation_summary(results)
        return results

    def validate_and_assert(
        self,
        response_data: Any,
        rules: List[ValidationRule],
    ) -> None:
        """
        Validate and raise if any rule fails.

        Raises:
            AssertionError: listing every failing field
        """
        results = self.validate(response_data, rules)
        failures = [r for r in results if not r.passed]

        if failures:
            error_text = "\n".join(f"- {f.rule.field}: {f.error_message}" for f in failures)
            raise AssertionError(
                f"Response validation failed ({len(failures)}/{len(results)} rules):\n"
                f"{error_text}"
            )

    def _apply_rule(self, response_data: Any, rule: ValidationRule) -> ValidationResult:
        try:
            actual_value = self._get_nested_value(response_data, rule.field)
        except (KeyError, IndexError, TypeError):
            if rule.required:
                return ValidationResult(
                    passed=False,
                    rule=rule,
                    error_message=f"Required field not found: {rule.field}"
                )
            return ValidationResult(
                passed=True,
                rule=rule,
                error_message=f"Optional field not found: {rule.field}"
            )

        handler = self._validation_handlers[rule.validation_type]
        passed, error_message = handler(actual_value, rule.expected)
        return ValidationResult(
            passed=passed,
            rule=rule,
            actual_value=actual_value,
            error_message=error_message
        )

    def _get_nested_value(self, data: Any, key_path: str) -> Any:
        """
        Resolve a dot path such as "data.items[0].id".

        Raises:
            KeyError / IndexError / TypeError: the path does not exist
        """
        current = data
        for key in key_path.split('.'):
            array_match = re.match(r'(\w+)\[(\d+)\]$', key)
            if array_match:
                current = current[array_match.group(1)][int(array_match.group(2))]
            else:
                if not isinstance(current, dict):
                    raise TypeError(f"Cannot read '{key}' from {type(current).__name__}")
                current = current[key]
        return current

    # Validation handlers
    def _validate_equal(self, actual: Any, expected: Any) -> tuple:
        passed = actual == expected
        error = "" if passed else f"Expected '{expected}', got '{actual}'"
        return passed, error

    def _validate_exists(self, actual: Any, expected: Any) -> tuple:
        # Reaching the handler means the key resolved; any value (even null) is accepted.
        return True, ""

    def _validate_is_not_null(self, actual: Any, expected: Any) -> tuple:
        passed = actual is not None
        error = "" if passed else "Expected non-null value, got null"
        return passed, error

    def _validate_type_check(self, actual: Any, expected: str) -> tuple:
        expected_type = TYPE_MAP.get(expected.lower())
        if expected_type is None:
            return False, f"Unknown type: {expected}"

        passed = isinstance(actual, expected_type)
        if expected.lower() in ("number", "integer") and isinstance(actual, bool):
            passed = False
        error = "" if passed else f"Expected type {expected}, got {type(actual).__name__}"
        return passed, error

    def _validate_iso_date(self, actual: Any, expected: Any) -> tuple:
        """Accept ISO 8601 dates and datetimes, including a trailing 'Z'."""
        if not isinstance(actual, str):
            return False, f"Expected ISO 8601 string, got {type(actual).__name__}"
        value = actual[:-1] + "+00:00" if actual.endswith("Z") else actual
        try:
            datetime.fromisoformat(value)
        except ValueError:
            return False, f"'{actual}' is not an ISO 8601 date"
        return True, ""

    def _validate_list_of(self, actual: Any, expected: str) -> tuple:
        if not isinstance(actual, list):
            return False, f"Expected array, got {type(actual).__name__}"
        for index, item in enumerate(actual):
            passed, error = self._validate_type_check(item, expected)
            if not passed:
                return False, f"Item {index}: {error}"
        return True, ""

    def _validate_regex_match(self, actual: Any, expected: str) -> tuple:
        try:
            passed = re.match(expected, str(actual)) is not None
        except re.error as e:
            return False, f"Invalid regex pattern: {e}"
        error = "" if passed else f"'{actual}' does not match pattern '{expected}'"
        return passed, error

    def _validate_length_greater_than(self, actual: Any, expected: int) -> tuple:
        actual_len = len(actual) if hasattr(actual, '__len__') else 0
        passed = actual_len > expected
        error = "" if passed else f"Expected length > {expected}, got {actual_len}"
        return passed, error

    def _validate_in_list(self, actual: Any, expected: List) -> tuple:
        passed = actual in expected
        error = "" if passed else f"'{actual}' not in {expected}"
        return passed, error

    def _attach_validation_summary(self, results: List[ValidationResult]) -> None:
        passed_count = sum(1 for r in results if r.passed)

        summary_lines = [
            f"Total Rules: {len(results)}",
            f"Passed: {passed_count}",
            f"Failed: {len(results) - passed_count}",
            "",
            "Details:",
            "-" * 40
        ]
        for result in results:
            status = "✅ PASS" if result.passed else "❌ FAIL"
            line = f"{status} | {result.rule.field}"
            if not result.passed:
                line += f" | {result.error_message}"
            summary_lines.append(line)

        attach_text("\n".join(summary_lines), name="Validation Summary")
