"""URL generation utilities for OAuth callbacks with reverse proxy support."""

from __future__ import annotations

import logging

from starlette.requests import Request

from .models import HttpTransportConfigModel

logger = logging.getLogger(__name__)


class URLBuilder:
    """Utility class for building callback URLs with proper scheme detection.

    Handles:
    - Explicit scheme configuration (http/https)
    - Base URL override
    - Reverse proxy header detection (X-Forwarded-Proto, X-Forwarded-Scheme)
    - Fallback to request scheme
    """

    def __init__(self, transport_config: HttpTransportConfigModel | None = None):
        self.transport_config = transport_config or HttpTransportConfigModel()

    def get_base_url(
        self,
        request: Request | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> str:
        """Get the base URL for the server.

        Args:
            request: Optional Starlette request for header inspection
            host: Override host (defaults to config or 'localhost')
            port: Override port (defaults to config or 8000)

        Returns:
            Complete base URL (e.g., 'https://api.example.com:8000')
        """
        if self.transport_config.base_url:
            return self.transport_config.base_url.rstrip("/")

        scheme = self._detect_scheme(request)
        final_host = host or self.transport_config.host or "localhost"
        final_port = port or self.transport_config.port or 8000

        if (scheme == "https" and final_port == 443) or (scheme == "http" and final_port == 80):
            base_url = f"{scheme}://{final_host}"
        else:
            base_url = f"{scheme}://{final_host}:{final_port}"

        logger.debug(
            "Built base URL",
            extra={"base_url": base_url, "scheme": scheme, "host": final_host, "port": final_port},
        )
        return base_url

    def build_callback_url(
        self,
        callback_path: str,
        request: Request | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> str:
        """Build a complete callback URL, e.g. ``https://host/microsoft/callback``."""
        base_url = self.get_base_url(request, host, port)
        return f"{base_url}/{callback_path.lstrip('/')}"

    def _detect_scheme(self, request: Request | None = None) -> str:
        """Detect the URL scheme.

        Priority order:
        1. Explicit scheme in transport config
        2. X-Forwarded-Proto header (if trust_proxy enabled)
        3. X-Forwarded-Scheme header (if trust_proxy enabled)
        4. Request scheme (if available)
        5. Default to 'http'
        """
        if self.transport_config.scheme:
            return self.transport_config.scheme

        if self.transport_config.trust_proxy and request is not None:
            forwarded_proto = request.headers.get("x-forwarded-proto")
            if forwarded_proto:
                # Comma-separated when several proxies are chained; first wins
                scheme = forwarded_proto.split(",")[0].strip().lower()
                if scheme in ("http", "https"):
                    return scheme

            forwarded_scheme = request.headers.get("x-forwarded-scheme")
            if forwarded_scheme:
                scheme = forwarded_scheme.strip().lower()
                if scheme in ("http", "https"):
                    return scheme

        if request is not None:
            scheme = request.url.scheme.lower()
            if scheme in ("http", "https"):
                return scheme

        return "http"
