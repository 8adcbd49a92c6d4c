"""
================================================================================
API Data Models
================================================================================

Typed views of the Goodbudget transactions API payloads.

    ApiResponse[T]            {success, data, message?, errors?}
    Transaction               server-owned record (id, timestamps)
    CreateTransactionRequest  POST /transactions body
    UpdateTransactionRequest  PUT /transactions/{id} body (partial)

================================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

import httpx


T = TypeVar("T")


@dataclass
class Transaction:
    """A transaction as returned by the API."""
    id: str
    amount: float
    description: str
    category: str
    date: str
    envelope_id: str
    account_id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        """Build from a JSON object, ignoring keys the model does not know."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


@dataclass
class CreateTransactionRequest:
    amount: float
    description: str
    category: str
    date: str
    envelope_id: str
    account_id: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UpdateTransactionRequest:
    """Partial update; only the fields that are set are sent."""
    id: str
    amount: Optional[float] = None
    description: Optional[str] = None
    category: Optional[str] = None
    date: Optional[str] = None
    envelope_id: Optional[str] = None
    account_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Request body. The id travels in the URL, not in the body."""
        return {
            key: value
            for key, value in asdict(self).items()
            if key != "id" and value is not None
        }


@dataclass
class ApiResponse(Generic[T]):
    """Standard response envelope."""
    success: bool
    data: T
    message: Optional[str] = None
    errors: Optional[List[str]] = None

    @classmethod
    def from_dict(
        cls,
        payload: Dict[str, Any],
        model: Optional[Type[Any]] = None,
        many: bool = False,
    ) -> "ApiResponse":
        """
        Parse an envelope.

        Args:
            payload: Decoded JSON body
            model: Class with a `from_dict` constructor for `data`; raw data if None
            many: `data` is a list of `model` objects
        """
        data = payload.get("data")
        if model is not None and data is not None:
            data = [model.from_dict(item) for item in data] if many else model.from_dict(data)
        return cls(
            success=payload["success"],
            data=data,
            message=payload.get("message"),
            errors=payload.get("errors"),
        )

    @classmethod
    def from_response(
        cls,
        response: httpx.Response,
        model: Optional[Type[Any]] = None,
        many: bool = False,
    ) -> "ApiResponse":
        return cls.from_dict(response.json(), model, many)


__all__ = [
    "ApiResponse",
    "CreateTransactionRequest",
    "Transaction",
    "UpdateTransactionRequest",
]
