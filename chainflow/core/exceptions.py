"""
Domain Exceptions

Services raise these; the global handler in main.py turns them into
structured JSON responses via to_http_exception().
"""
from typing import Any, Dict, Optional

from fastapi import HTTPException


class ChainFlowException(Exception):
    """Base class for all domain errors."""

    code = "ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationException(ChainFlowException):
    code = "VALIDATION_ERROR"
    status_code = 400


class EntityNotFoundException(ChainFlowException):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity} not found",
            details={"entity": entity, "id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class InsufficientStockException(ChainFlowException):
    code = "INSUFFICIENT_STOCK"
    status_code = 400

    def __init__(self, item_name: str, available: int, requested: int, inventory_id: Optional[int] = None):
        super().__init__(
            f"Insufficient stock for {item_name}. Available: {available}, Requested: {requested}",
            details={
                "inventory_id": inventory_id,
                "item": item_name,
                "available": available,
                "requested": requested,
            },
        )
        self.item_name = item_name
        self.available = available
        self.requested = requested


class ConflictException(ChainFlowException):
    code = "CONFLICT"
    status_code = 409


class DuplicateEntityException(ConflictException):
    code = "DUPLICATE"

    def __init__(self, entity: str, field: str, value: Any):
        super().__init__(
            f"{entity} with {field} '{value}' already exists",
            details={"entity": entity, "field": field, "value": value},
        )


class AuthenticationException(ChainFlowException):
    code = "AUTHENTICATION_FAILED"
    status_code = 401


class AuthorizationException(ChainFlowException):
    code = "FORBIDDEN"
    status_code = 403


def to_http_exception(exc: ChainFlowException, include_details: bool = True) -> HTTPException:
    detail: Dict[str, Any] = {"code": exc.code, "message": exc.message}
    if include_details and exc.details:
        detail["details"] = exc.details
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationException) else None
    return HTTPException(status_code=exc.status_code, detail=detail, headers=headers)
