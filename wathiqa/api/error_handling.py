"""
Archive error handling utilities.

Maps domain exceptions onto HTTP status codes in one place, either via the
``handle_archive_errors`` decorator on route functions or directly through
``to_http_exception`` inside dependencies.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError

from wathiqa.core.exceptions import (
    AccessDeniedError,
    ArchiveException,
    ArchiveStoreError,
    BlockRegistrationError,
    InvalidFormatError,
    ResourceNotFoundError,
    SessionExpiredError,
    UnknownBlockError,
    UsernameTakenError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_STATUS_BY_EXCEPTION: tuple[tuple[type[ArchiveException], int], ...] = (
    (InvalidFormatError, status.HTTP_400_BAD_REQUEST),
    (UnknownBlockError, status.HTTP_404_NOT_FOUND),
    (BlockRegistrationError, status.HTTP_409_CONFLICT),
    (UsernameTakenError, status.HTTP_409_CONFLICT),
    (ResourceNotFoundError, status.HTTP_404_NOT_FOUND),
    (AccessDeniedError, status.HTTP_403_FORBIDDEN),
    (SessionExpiredError, status.HTTP_401_UNAUTHORIZED),
    (ArchiveStoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def to_http_exception(exc: ArchiveException) -> HTTPException:
    """Translate a domain exception into an HTTPException."""
    for exc_type, status_code in _STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            break
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if status_code >= 500:
        logger.error("Archive operation failed", extra={"error": str(exc)})
    else:
        logger.warning(
            "Archive request rejected",
            extra={"status_code": status_code, "error": exc.message},
        )
    return HTTPException(status_code=status_code, detail=exc.message)


def handle_archive_errors(func: F) -> F:
    """
    Decorator turning archive errors raised by a route into HTTPExceptions.

    Pydantic errors become 422. Other ValueErrors from the service layer
    become 400, or 404 when they read "not found". Anything else is 500.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except ArchiveException as e:
            raise to_http_exception(e) from e

        except ValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(),
            )

        except ValueError as e:
            msg = str(e).lower()
            if "not found" in msg or "does not exist" in msg:
                logger.warning("Resource not found (ValueError)", extra={"error": str(e)})
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
            logger.warning("Invalid request (ValueError)", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        except Exception as e:
            logger.exception("Unexpected failure in archive operation", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
