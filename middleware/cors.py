"""
Cross-origin access control.

Origins are checked against an explicit CORSConfig built once at startup:
a list of exact origins plus one compiled pattern for preview deployments
(https://<project>-<hash-or-branch>-<scope>.<domain>). Requests without an
Origin header (curl, server-to-server, same-origin GETs) pass through.
Anything else is rejected with 403 and the origin is logged.
"""

from dataclasses import dataclass
from typing import Optional, Pattern, Tuple
import logging
import re

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from config import Settings

logger = logging.getLogger(__name__)

CORS_REJECTION_MESSAGE = "Not allowed by CORS"


def preview_origin_pattern(project: str, scope: str, domain: str = "vercel.app") -> Pattern[str]:
    """
    Pattern for preview deployment origins of one project.

    Matches e.g. https://ber-calculator-client-6j70mopxl-naseems-projects-1f6111c0.vercel.app
    and branch deployments such as ...-client-git-main-naseems-projects-....
    """
    return re.compile(
        rf"https://{re.escape(project)}-[a-z0-9-]+-{re.escape(scope)}\.{re.escape(domain)}"
    )


@dataclass(frozen=True)
class CORSConfig:
    """Exact allowed origins plus one preview-deployment pattern."""

    allowed_origins: Tuple[str, ...]
    origin_pattern: Optional[Pattern[str]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "CORSConfig":
        return cls(
            allowed_origins=tuple(settings.allowed_origins),
            origin_pattern=preview_origin_pattern(
                settings.preview_project,
                settings.preview_scope,
                settings.preview_domain,
            ),
        )

    def is_origin_allowed(self, origin: Optional[str]) -> bool:
        if not origin:
            return True
        if origin in self.allowed_origins:
            return True
        return bool(self.origin_pattern and self.origin_pattern.fullmatch(origin))


class AllowListCORSMiddleware(CORSMiddleware):
    """
    Starlette CORS middleware driven by a CORSConfig.

    Unlike the stock middleware, which only withholds the CORS headers from
    a disallowed origin, requests from an unknown origin are answered with
    403 {"message": "Not allowed by CORS"} before reaching a route.
    """

    def __init__(self, app: ASGIApp, cors_config: CORSConfig):
        super().__init__(
            app,
            allow_origins=list(cors_config.allowed_origins),
            allow_origin_regex=(
                cors_config.origin_pattern.pattern if cors_config.origin_pattern else None
            ),
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
        self.cors_config = cors_config

    def is_allowed_origin(self, origin: str) -> bool:
        return self.cors_config.is_origin_allowed(origin)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            origin = Headers(scope=scope).get("origin")
            if not self.cors_config.is_origin_allowed(origin):
                logger.error(
                    f"CORS rejection: origin not allowed -> {origin} "
                    f"({scope['method']} {scope['path']})"
                )
                response = JSONResponse(
                    status_code=403,
                    content={"message": CORS_REJECTION_MESSAGE},
                )
                await response(scope, receive, send)
                return

        await super().__call__(scope, receive, send)


def setup_cors(app: FastAPI, cors_config: CORSConfig) -> None:
    """
    Install origin checking on the FastAPI application.

    Args:
        app: FastAPI application instance
        cors_config: Allowed origins and preview pattern
    """
    app.add_middleware(AllowListCORSMiddleware, cors_config=cors_config)

    logger.info(
        f"CORS configured: {len(cors_config.allowed_origins)} exact origin(s), "
        f"preview pattern={cors_config.origin_pattern.pattern if cors_config.origin_pattern else None}"
    )
