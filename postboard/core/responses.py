"""Uniform JSON envelope for every API response."""

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success(
    data: dict[str, Any] | None = None,
    message: str = "",
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Success shape: {status: true, message, data}."""
    return JSONResponse(
        status_code=status_code,
        content={
            "status": True,
            "message": message,
            "data": jsonable_encoder(data or {}),
        },
    )


def error(
    message: str,
    status_code: int,
    errors: dict[str, list[str]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Failure shape: {status: false, message, errors?}. errors is omitted when empty."""
    content: dict[str, Any] = {"status": False, "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)
