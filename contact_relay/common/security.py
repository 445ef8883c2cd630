"""
Request guards applied before any route runs.
"""
from typing import Iterable, List

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from contact_relay.common.utils.global_messages import GlobalMessages

SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
}


async def security_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


class OriginGuardMiddleware(CORSMiddleware):
    """
    CORS handling that refuses requests it cannot attribute to an origin.

    A request without an ``Origin`` header is rejected outright. When the
    allow-list is empty any present origin is accepted, otherwise the origin
    must be listed. Accepted requests fall through to Starlette's CORS
    handling so preflights and response headers behave as usual.
    """

    def __init__(
        self,
        app: ASGIApp,
        allowed_origins: Iterable[str] = (),
        exempt_paths: Iterable[str] = ("/health",),
    ) -> None:
        self.origin_allow_list: List[str] = list(allowed_origins)
        self.exempt_paths = frozenset(exempt_paths)
        super().__init__(
            app,
            allow_origins=self.origin_allow_list or ["*"],
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type"],
        )

    def rejection_reason(self, origin: str) -> str:
        if not origin:
            return GlobalMessages.ORIGIN_REQUIRED
        if self.origin_allow_list and origin not in self.origin_allow_list:
            return GlobalMessages.ORIGIN_NOT_ALLOWED.format(origin=origin)
        return ""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["path"] in self.exempt_paths:
            await self.app(scope, receive, send)
            return

        reason = self.rejection_reason(Headers(scope=scope).get("origin", ""))
        if reason:
            response = JSONResponse({"ok": False, "error": reason}, status_code=403)
            await response(scope, receive, send)
            return

        await super().__call__(scope, receive, send)
