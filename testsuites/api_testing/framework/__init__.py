"""
================================================================================
API Testing Framework
================================================================================

Components for the Goodbudget REST API suite.

Modules:
    - api_client: httpx client with logging hooks and Allure reporting
    - models: typed request/response payloads
    - response_validator / schemas: rule-based payload validation
    - data_factory: transaction test data
    - transaction_tracker: creates transactions and deletes them afterwards

Author: Automation Team
License: MIT
================================================================================
"""

from .api_client import ENDPOINTS, ApiClient, ApiClientError
from .data_factory import (
    INVALID_TRANSACTION_DATA,
    TEST_TRANSACTIONS,
    TransactionFactory,
    generate_unique_id,
)
from .models import ApiResponse, CreateTransactionRequest, Transaction, UpdateTransactionRequest
from .response_validator import ResponseValidator, ValidationRule, ValidationType
from .schemas import (
    API_RESPONSE_RULES,
    ERROR_RESPONSE_RULES,
    LIST_RESPONSE_RULES,
    TRANSACTION_RULES,
    created_transaction_rules,
)
from .transaction_tracker import TransactionTracker

__all__ = [
    "API_RESPONSE_RULES",
    "ApiClient",
    "ApiClientError",
    "ApiResponse",
    "CreateTransactionRequest",
    "ENDPOINTS",
    "ERROR_RESPONSE_RULES",
    "INVALID_TRANSACTION_DATA",
    "LIST_RESPONSE_RULES",
    "ResponseValidator",
    "TEST_TRANSACTIONS",
    "TRANSACTION_RULES",
    "Transaction",
    "TransactionFactory",
    "TransactionTracker",
    "UpdateTransactionRequest",
    "ValidationRule",
    "ValidationType",
    "created_transaction_rules",
    "generate_unique_id",
]
