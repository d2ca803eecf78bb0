"""HTTP handlers for record operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error translation.
"""

from fastapi import HTTPException, status

from cache_aside.dto import HealthCheckResponse, RecordItem, RecordPayload
from cache_aside.errors import (
    ConstraintViolation,
    RecordServiceError,
    StoreUnavailable,
    ValidationError,
)
from cache_aside.logging_config import get_logger
from cache_aside.services import CacheAsideService

logger = get_logger(__name__)

# Duplicate emails stay a 500 to keep the existing API contract
STATUS_BY_ERROR: dict[type[RecordServiceError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConstraintViolation: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StoreUnavailable: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

FETCH_FAILED = "Error fetching data"
INSERT_FAILED = "Error inserting data"
UPDATE_FAILED = "Error updating data"
DELETE_FAILED = "Error deleting data"


def status_for(error: Exception) -> int:
    """Look up the HTTP status for an error, walking its class hierarchy."""
    for cls in type(error).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def to_http_exception(error: Exception, failure_message: str) -> HTTPException:
    """Translate a service error into an HTTPException.

    Client faults keep their own message; server faults get the generic
    per-operation message so store internals are not leaked.
    """
    status_code = status_for(error)
    if status_code < status.HTTP_500_INTERNAL_SERVER_ERROR and isinstance(error, RecordServiceError):
        return HTTPException(status_code=status_code, detail=error.message)

    logger.error(failure_message, error=str(error), code=getattr(error, "code", type(error).__name__))
    return HTTPException(status_code=status_code, detail=failure_message)


# users.id is a SERIAL, i.e. a 4-byte PostgreSQL integer
MIN_RECORD_ID = -(2**31)
MAX_RECORD_ID = 2**31 - 1


def parse_record_id(raw: str) -> int:
    """Parse a path id.

    Raises:
        ValidationError: if raw is not an integer in the id column's range
    """
    try:
        record_id = int(raw)
    except ValueError as e:
        raise ValidationError("Record id must be an integer.", details={"id": raw}) from e

    if not MIN_RECORD_ID <= record_id <= MAX_RECORD_ID:
        raise ValidationError("Record id is out of range.", details={"id": raw})
    return record_id


class RecordHandler:
    """HTTP handlers for the /data resource.

    This handler delegates business logic to CacheAsideService
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Setting appropriate status codes
    - Error translation through STATUS_BY_ERROR

    Example:
        ```python
        handler = RecordHandler(service=CacheAsideService(store=repository))

        @app.get("/data", response_model=list[RecordItem])
        async def list_records(refresh: str | None = None):
            return await handler.list_records(refresh == "true")
        ```
    """

    def __init__(self, service: CacheAsideService) -> None:
        """Initialize the record handler.

        Args:
            service: The cache-aside service for business logic (required).
        """
        self._service = service

    async def list_records(self, refresh: bool = False) -> list[RecordItem]:
        """Handle GET /data requests."""
        try:
            records = await self._service.fetch_all(force_refresh=refresh)
        except Exception as e:
            raise to_http_exception(e, FETCH_FAILED) from e

        return [RecordItem(id=r.id, name=r.name, email=r.email) for r in records]

    async def create_record(self, payload: RecordPayload | None) -> str:
        """Handle POST /data requests.

        Returns:
            Confirmation text for a 201 response
        """
        payload = payload or RecordPayload()
        try:
            record = await self._service.create(payload.name, payload.email)
        except Exception as e:
            raise to_http_exception(e, INSERT_FAILED) from e

        logger.info("Record created", record_id=record.id)
        return "Data added successfully"

    async def update_record(self, record_id: str, payload: RecordPayload | None) -> str:
        """Handle PUT /data/{record_id} requests."""
        payload = payload or RecordPayload()
        try:
            updated = await self._service.update(parse_record_id(record_id), payload.name, payload.email)
        except Exception as e:
            raise to_http_exception(e, UPDATE_FAILED) from e

        logger.info("Record updated", record_id=record_id, found=updated)
        return "Data updated successfully"

    async def delete_record(self, record_id: str) -> str:
        """Handle DELETE /data/{record_id} requests."""
        try:
            deleted = await self._service.delete(parse_record_id(record_id))
        except Exception as e:
            raise to_http_exception(e, DELETE_FAILED) from e

        logger.info("Record deleted", record_id=record_id, found=deleted)
        return "Data deleted successfully"

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Raises:
            HTTPException: 503 if the store is unreachable
        """
        health = await self._service.is_healthy()
        response = HealthCheckResponse(
            status="healthy" if health["store"] else "unhealthy",
            store_healthy=health["store"],
            cache_enabled=self._service.cache_enabled,
            cache_healthy=health["cache"],
        )
        if not health["store"]:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=response.model_dump(),
            )
        return response
