"""
================================================================================
Transaction Data Factory
================================================================================

Fixed transaction templates plus helpers that make each payload unique.

Features:
- Three reference transactions (expense, groceries, income)
- Invalid payloads for negative tests
- Unique ids in the form test_<epoch ms>_<9 base36 chars>

================================================================================
"""

import random
import string
import time
from dataclasses import replace
from typing import Any, Dict, List, Optional

from .models import CreateTransactionRequest


# ================================================================================
# Reference Data
# ================================================================================

TEST_TRANSACTIONS: List[CreateTransactionRequest] = [
    CreateTransactionRequest(
        amount=-25.50,
        description="Coffee at Starbucks",
        category="Food & Dining",
        date="2024-06-01",
        envelope_id="env_food_001",
        account_id="acc_checking_001",
    ),
    CreateTransactionRequest(
        amount=-120.00,
        description="Grocery shopping",
        category="Groceries",
        date="2024-06-01",
        envelope_id="env_groceries_001",
        account_id="acc_checking_001",
    ),
    CreateTransactionRequest(
        amount=2500.00,
        description="Monthly salary",
        category="Income",
        date="2024-06-01",
        envelope_id="env_income_001",
        account_id="acc_checking_001",
    ),
]

INVALID_TRANSACTION_DATA: Dict[str, Dict[str, Any]] = {
    "missing_amount": {
        "description": "Test transaction",
        "category": "Test",
        "date": "2024-06-01",
        "envelope_id": "env_test_001",
        "account_id": "acc_test_001",
    },
    "invalid_amount": {
        "amount": "invalid",
        "description": "Test transaction",
        "category": "Test",
        "date": "2024-06-01",
        "envelope_id": "env_test_001",
        "account_id": "acc_test_001",
    },
}

_BASE36 = string.digits + string.ascii_lowercase


def generate_unique_id(rng: Optional[random.Random] = None) -> str:
    """Unique marker for test data: test_<epoch ms>_<9 base36 chars>."""
    rng = rng or random
    millis = int(time.time() * 1000)
    suffix = "".join(rng.choice(_BASE36) for _ in range(9))
    return f"test_{millis}_{suffix}"


# ================================================================================
# Factory
# ================================================================================

class TransactionFactory:
    """
    Builds transaction payloads from the reference templates.

    Usage:
        factory = TransactionFactory()
        payload = factory.create_payload(0, "Test transaction")
    """

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def create(self, template: int = 0, description_prefix: str = "Test transaction") -> CreateTransactionRequest:
        """
        Copy a reference transaction with a unique description.

        Args:
            template: Index into TEST_TRANSACTIONS
            description_prefix: Text placed before the unique id
        """
        return replace(
            TEST_TRANSACTIONS[template],
            description=f"{description_prefix} {generate_unique_id(self.rng)}",
        )

    def create_payload(self, template: int = 0, description_prefix: str = "Test transaction") -> Dict[str, Any]:
        return self.create(template, description_prefix).to_dict()

    def invalid(self, kind: str) -> Dict[str, Any]:
        """Copy of a named invalid payload ("missing_amount", "invalid_amount")."""
        return dict(INVALID_TRANSACTION_DATA[kind])


__all__ = [
    "INVALID_TRANSACTION_DATA",
    "TEST_TRANSACTIONS",
    "TransactionFactory",
    "generate_unique_id",
]
