"""
================================================================================
Transaction Tracker
================================================================================

Creates transactions for a test module and deletes them afterwards.

The id is recorded straight from the raw response body, before the payload is
parsed into a Transaction, so a record the server created is cleaned up even
when its payload does not match the model.

Usage:
    tracker = TransactionTracker(client)
    transaction = tracker.create(payload)
    ...
    tracker.cleanup()

================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from autotest_tools.common.structured_logger import StructuredLogger, create_util_logger

from .api_client import ENDPOINTS, ApiClient
from .models import ApiResponse, Transaction


class TransactionTracker:
    """Ids of transactions created through the API that still need deleting."""

    def __init__(self, client: ApiClient, logger: Optional[StructuredLogger] = None):
        self.client = client
        self.logger = logger or create_util_logger("TransactionTracker")
        self.ids: List[str] = []

    def create(self, payload: Dict[str, Any]) -> Transaction:
        """POST a transaction, track its id, then parse it."""
        response = self.client.post(ENDPOINTS.TRANSACTIONS, json=payload)
        self.track(response)
        return ApiResponse.from_response(response, Transaction).data

    def track(self, response: httpx.Response) -> str:
        transaction_id = response.json()["data"]["id"]
        self.ids.append(transaction_id)
        self.logger.debug(f"Tracking transaction: {transaction_id}")
        return transaction_id

    def cleanup(self) -> List[str]:
        """
        Delete every tracked transaction.

        A failed delete is logged as a warning and the remaining ids are still
        processed.

        Returns:
            Ids whose delete failed
        """
        failed = []
        for transaction_id in self.ids:
            try:
                self.client.delete(ENDPOINTS.transaction(transaction_id))
                self.logger.debug(f"Cleaned up transaction: {transaction_id}")
            except httpx.HTTPError as e:
                failed.append(transaction_id)
                self.logger.warn(
                    f"Failed to cleanup transaction {transaction_id}",
                    {"error": str(e)},
                )
        self.ids.clear()
        return failed


__all__ = ["TransactionTracker"]
