"""
GameTrc - custom exceptions and their FastAPI exception handlers.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from pydantic import ValidationError as PydanticValidationError

from .utils.response import error_response

logger = logging.getLogger(__name__)


class GameTrcError(Exception):
    """Base exception for GameTrc"""
    status_code = 400

    def __init__(self, message: str, code: str = "GAMETRC_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"code": self.code}


class ValidationError(GameTrcError):
    """Invalid or missing field on a write; raised before anything is persisted."""
    status_code = 422

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        logger.warning(f"Validation error on '{field}': {message}")

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        """Report the first pydantic error, naming the offending field."""
        err = exc.errors()[0]
        field = ".".join(str(p) for p in err.get("loc", ())) or None
        return cls(err.get("msg", "invalid value"), field=field)

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.field:
            data["field"] = self.field
        return data


class NotFoundError(GameTrcError):
    status_code = 404

    def __init__(self, message: str = "Game not found"):
        super().__init__(message, code="NOT_FOUND")


class StorageError(GameTrcError):
    """Database / disk failure. The transaction has already been rolled back."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")
        logger.error(f"Storage error: {message}")


class ImageError(GameTrcError):
    """Cover art or screenshot could not be copied or downloaded."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message, code="IMAGE_ERROR")
        logger.warning(f"Image error: {message}")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        # Detail is already logged; clients get a generic failure.
        return error_response("Storage failure, see server logs", exc.status_code, **exc.to_dict())

    @app.exception_handler(GameTrcError)
    async def handle_gametrc_error(request: Request, exc: GameTrcError):
        return error_response(exc.message, exc.status_code, **exc.to_dict())
