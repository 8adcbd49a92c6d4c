# ================================================================================
# Response Schemas
# ================================================================================
#
# Rule lists describing the Goodbudget API payloads, for ResponseValidator.
#
#   TRANSACTION_RULES            -> a single Transaction object
#   API_RESPONSE_RULES           -> the {success, data, message?, errors?} envelope
#   LIST_RESPONSE_RULES          -> a successful, non-empty list envelope
#   ERROR_RESPONSE_RULES         -> a failed envelope
#   created_transaction_rules()  -> a transaction created from a factory payload
#
# ================================================================================

from typing import Any, Dict, List

from .data_factory import TEST_TRANSACTIONS
from .response_validator import ValidationRule, ValidationType


# "<prefix> test_<epoch ms>_<9 base36 chars>", see generate_unique_id()
UNIQUE_DESCRIPTION_PATTERN = r"^.+ test_\d+_[0-9a-z]{9}$"

TRANSACTION_CATEGORIES = sorted({t.category for t in TEST_TRANSACTIONS})


def _required_string(field: str) -> ValidationRule:
    return ValidationRule(field, ValidationType.TYPE_CHECK, "string", f"{field} is a string")


TRANSACTION_RULES: List[ValidationRule] = [
    _required_string("id"),
    ValidationRule("amount", ValidationType.TYPE_CHECK, "number", "amount is a number"),
    _required_string("description"),
    _required_string("category"),
    ValidationRule("date", ValidationType.ISO_DATE, description="date is ISO 8601"),
    _required_string("envelope_id"),
    _required_string("account_id"),
    ValidationRule(
        "created_at", ValidationType.ISO_DATE,
        description="created_at is ISO 8601", required=False,
    ),
    ValidationRule(
        "updated_at", ValidationType.ISO_DATE,
        description="updated_at is ISO 8601", required=False,
    ),
]


API_RESPONSE_RULES: List[ValidationRule] = [
    ValidationRule("success", ValidationType.TYPE_CHECK, "boolean", "success is a boolean"),
    ValidationRule("data", ValidationType.EXISTS, description="data is present"),
    ValidationRule(
        "message", ValidationType.TYPE_CHECK, "string",
        "message is a string", required=False,
    ),
    ValidationRule(
        "errors", ValidationType.LIST_OF, "string",
        "errors is a list of strings", required=False,
    ),
]


LIST_RESPONSE_RULES: List[ValidationRule] = [
    ValidationRule("success", ValidationType.EQUAL, True, "success is true"),
    ValidationRule("data", ValidationType.LENGTH_GREATER_THAN, 0, "data lists at least one transaction"),
    ValidationRule("data[0].id", ValidationType.IS_NOT_NULL, description="listed transactions carry an id"),
]


ERROR_RESPONSE_RULES: List[ValidationRule] = [
    ValidationRule("success", ValidationType.EQUAL, False, "success is false"),
    ValidationRule(
        "errors", ValidationType.LIST_OF, "string",
        "errors is a list of strings", required=False,
    ),
]


def created_transaction_rules(payload: Dict[str, Any]) -> List[ValidationRule]:
    """TRANSACTION_RULES plus checks that the server kept what the factory sent."""
    return TRANSACTION_RULES + [
        ValidationRule(
            "description", ValidationType.EQUAL, payload["description"],
            "description is echoed back",
        ),
        ValidationRule(
            "description", ValidationType.REGEX_MATCH, UNIQUE_DESCRIPTION_PATTERN,
            "description carries the unique test id",
        ),
        ValidationRule(
            "category", ValidationType.IN_LIST, TRANSACTION_CATEGORIES,
            "category is a reference category",
        ),
    ]
