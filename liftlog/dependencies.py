"""Shared request dependencies and the API error type."""
from __future__ import annotations

import logging
from typing import Callable

from fastapi import Depends, Header, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from liftlog.services.identity import AuthenticationError, TokenResolver, get_token_resolver


logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class ApiError(Exception):
    """Error rendered to clients as ``{"error": message}`` with the given status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def validation_message(exc: RequestValidationError) -> str:
    """Condense the first validation error into one line, e.g. ``sets.0: Field required``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


class ApiErrorRoute(APIRoute):
    """Route that reports request validation failures as ``400 {"error": message}``."""

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def route_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except RequestValidationError as exc:
                logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
                raise ApiError(400, validation_message(exc)) from exc

        return route_handler


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def get_current_user_id(
    authorization: str | None = Header(default=None),
    resolver: TokenResolver = Depends(get_token_resolver),
) -> str:
    """
    Resolve the caller's user id from the bearer token.

    Raises:
        ApiError: 401 when the header is missing or the token is rejected
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise ApiError(401, "Missing auth token")

    try:
        return resolver.resolve(token)
    except AuthenticationError as err:
        logger.info("Rejected bearer token: %s", err)
        raise ApiError(401, "Unauthorized") from err
