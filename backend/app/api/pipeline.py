"""Request Pipeline — ordered pre-routing stages run by one fixed driver loop.

Invariants:
    - Stage order is total: security headers → body parsing → origin check → rate limiting,
      then routing, validation and controller inside FastAPI
    - A stage returns None to continue, or a Response (or raises ApiError) to end the request
    - Headers collected in StageContext are applied to every response, short-circuited or not
    - Every exception reaching the driver is rendered by ErrorResponder exactly once;
      the driver never re-raises
    - Rate-limit rejections answer {statusCode, message}, not the failure envelope

Design Decisions:
    - Stages as a plain list of async callables: the order is data that tests can inspect
    - Parsed body handed to validation through request.state (shared ASGI scope state)
    - OPTIONS short-circuits in the origin stage, before it can consume rate-limit budget
"""

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Sequence
from urllib.parse import parse_qsl

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from app.api.error_handlers import ErrorResponder
from app.core.errors import ApiError, ErrorKind
from app.core.rate_limiter import FixedWindowRateLimiter, RateLimitDecision

logger = logging.getLogger(__name__)

BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})
RATE_LIMIT_MESSAGE = "Too many requests, please try again later."

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';frame-ancestors 'self';"
        "object-src 'none';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


@dataclass
class StageContext:
    """Per-request scratch space shared by the stages."""
    response_headers: dict[str, str] = field(default_factory=dict)


Stage = Callable[[Request, StageContext], Awaitable[Response | None]]


# ─── STAGES ─────────────────────────────────────────────────────

async def security_headers(request: Request, context: StageContext) -> None:
    context.response_headers.update(SECURITY_HEADERS)


class BodyParser:
    """Read and decode JSON or url-encoded bodies up to max_bytes."""

    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes

    async def __call__(self, request: Request, context: StageContext) -> None:
        if request.method not in BODY_METHODS:
            return None
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_bytes:
            raise self._too_large()
        raw = await request.body()
        if len(raw) > self.max_bytes:
            raise self._too_large()
        request.state.body = parse_body(raw, request.headers.get("content-type", ""))
        return None

    def _too_large(self) -> ApiError:
        return ApiError(
            ErrorKind.PAYLOAD_TOO_LARGE,
            f"Request body exceeds {self.max_bytes // 1024}kb limit",
        )


def parse_body(raw: bytes, content_type: str) -> object:
    """Decode raw bytes by media type; unknown types yield an empty object."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    if not raw:
        return {}
    if media_type == "application/json" or media_type.endswith("+json"):
        try:
            return json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError):
            raise ApiError(ErrorKind.VALIDATION_ERROR, "Malformed JSON body")
    if media_type == "application/x-www-form-urlencoded":
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise ApiError(ErrorKind.VALIDATION_ERROR, "Malformed form body")
        return dict(parse_qsl(text, keep_blank_values=True))
    return {}


class OriginCheck:
    """Attach CORS headers for the one allowed origin; answer preflights."""

    def __init__(self, allowed_origin: str):
        self.allowed_origin = allowed_origin

    async def __call__(
        self, request: Request, context: StageContext,
    ) -> Response | None:
        if request.headers.get("origin") == self.allowed_origin:
            context.response_headers.update({
                "Access-Control-Allow-Origin": self.allowed_origin,
                "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type, Authorization",
                "Access-Control-Max-Age": "3600",
                "Vary": "Origin",
            })
        if request.method == "OPTIONS":
            return Response(status_code=200)
        return None


class RateLimit:
    """Global limiter on every route plus a stricter one on submit routes."""

    def __init__(
        self,
        global_limiter: FixedWindowRateLimiter,
        submit_limiter: FixedWindowRateLimiter,
        submit_prefixes: Sequence[str] = ("/v1/waitlist", "/v1/contact"),
    ):
        self.global_limiter = global_limiter
        self.submit_limiter = submit_limiter
        self.submit_prefixes = tuple(submit_prefixes)

    async def __call__(
        self, request: Request, context: StageContext,
    ) -> Response | None:
        client_ip = _client_ip(request)
        limiters = [self.global_limiter]
        if request.url.path.startswith(self.submit_prefixes):
            limiters.append(self.submit_limiter)

        for limiter in limiters:
            decision = limiter.hit(client_ip)
            context.response_headers.update(_rate_limit_headers(decision))
            if not decision.allowed:
                logger.warning(
                    "Rate limit exceeded",
                    extra={"client_ip": client_ip, "path": request.url.path},
                )
                return JSONResponse(
                    status_code=429,
                    content={"statusCode": 429, "message": RATE_LIMIT_MESSAGE},
                    headers={"Retry-After": str(decision.retry_after_seconds)},
                )
        return None


def _rate_limit_headers(decision: RateLimitDecision) -> dict[str, str]:
    return {
        "RateLimit-Limit": str(decision.limit),
        "RateLimit-Remaining": str(decision.remaining),
        "RateLimit-Reset": str(decision.retry_after_seconds),
    }


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


# ─── DRIVER ─────────────────────────────────────────────────────

class RequestPipeline(BaseHTTPMiddleware):
    """Run the stages in order, then the router; render any failure."""

    def __init__(
        self,
        app: ASGIApp,
        stages: Sequence[Stage],
        responder: ErrorResponder,
    ):
        super().__init__(app)
        self.stages = tuple(stages)
        self.responder = responder

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        context = StageContext()
        try:
            response = await self._run_stages(request, context)
            if response is None:
                response = await call_next(request)
        except Exception as exc:
            response = self.responder(request, exc)

        for name, value in context.response_headers.items():
            response.headers[name] = value

        logger.info(
            f"{request.method} {request.url.path} → {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
                "client_ip": _client_ip(request),
            },
        )
        return response

    async def _run_stages(
        self, request: Request, context: StageContext,
    ) -> Response | None:
        for stage in self.stages:
            response = await stage(request, context)
            if response is not None:
                return response
        return None


def build_stages(
    *,
    allowed_origin: str,
    max_body_bytes: int,
    global_limiter: FixedWindowRateLimiter,
    submit_limiter: FixedWindowRateLimiter,
) -> list[Stage]:
    """The fixed stage order every request goes through."""
    return [
        security_headers,
        BodyParser(max_body_bytes),
        OriginCheck(allowed_origin),
        RateLimit(global_limiter, submit_limiter),
    ]
