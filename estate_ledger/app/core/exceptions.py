"""
Custom exceptions and error handlers for consistent error responses.

Provides standardized error codes and global exception handlers.

Payment failures are classified as:
    InvalidArgumentError   - rejected before any storage access
    PayeeNotFoundError     - payee absent at validation or commit time
    StorageFaultError      - store unreachable or commit refused
    TransactionFailedError - any failure after the unit of work began;
                             always implies full rollback
"""

import logging
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from typing import Any, Dict

logger = logging.getLogger("estate_ledger.errors")


class AppException(Exception):
    """Base application exception."""
    
    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InvalidArgumentError(AppException):
    """Raised when a request carries a malformed amount, date or identifier."""
    
    def __init__(self, field: str, message: str):
        super().__init__(
            message=message,
            error_code="ERR_INVALID_ARGUMENT",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"field": field}
        )
        self.field = field


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""
    
    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id}
        )


class PayeeNotFoundError(ResourceNotFoundError):
    """Raised when a worker or vendor id does not resolve to a payee of that kind."""
    
    def __init__(self, kind: str, payee_id: Any):
        super().__init__(resource=kind, resource_id=payee_id)
        self.kind = kind
        self.payee_id = payee_id


class StorageFaultError(AppException):
    """Raised when the store is unreachable or refuses to commit."""
    
    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(
            message=message,
            error_code="ERR_STORAGE_FAULT",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )


class TransactionFailedError(AppException):
    """
    Raised when a payment unit of work was rolled back.
    
    Wraps the underlying cause; the HTTP status follows the cause so a
    vanished payee still reads as 404 and an infrastructure error as 503.
    """
    
    def __init__(self, cause: AppException):
        super().__init__(
            message=f"Payment was not recorded: {cause.message}",
            error_code="ERR_TXN_FAILED",
            status_code=cause.status_code,
            details={"cause": cause.error_code, **cause.details}
        )
        self.cause = cause


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for FastAPI HTTPException with standardized format."""
    # Map status code to error code
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        404: "ERR_NOT_FOUND",
        405: "ERR_METHOD_NOT_ALLOWED",
        500: "ERR_INTERNAL_SERVER"
    }
    
    error_code = error_code_map.get(exc.status_code, "ERR_UNKNOWN")
    
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": exc.detail,
            "details": {}
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "ERR_VALIDATION",
            "message": "Validation error",
            "details": {
                "errors": [
                    {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                    for err in exc.errors()
                ]
            }
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.error(
        "Unhandled exception: %s: %s",
        type(exc).__name__,
        exc,
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "ERR_INTERNAL_SERVER",
            "message": "An internal server error occurred",
            "details": {}
        }
    )
