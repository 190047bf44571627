"""Middleware package for FastAPI backend."""

from .cors import (
    CORSConfig,
    AllowListCORSMiddleware,
    preview_origin_pattern,
    setup_cors,
    CORS_REJECTION_MESSAGE,
)
from .error_handlers import setup_error_handlers

__all__ = [
    "CORSConfig",
    "AllowListCORSMiddleware",
    "preview_origin_pattern",
    "setup_cors",
    "CORS_REJECTION_MESSAGE",
    "setup_error_handlers",
]
