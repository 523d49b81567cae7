"""
Response Handler
================
Centralized Graph API response parsing and error detection.
Both external calls (oEmbed lookup, media fetch) go through here.

Graph error body:
    {"error": {"message": "...", "type": "OAuthException", "code": 190, "fbtrace_id": "..."}}
"""

import logging
from typing import Any, Dict

from .exceptions import UpstreamError

logger = logging.getLogger("ig_gallery.response")


# Import at function-call time to avoid circular import
def _dbg():
    from .log_config import get_debug_logger
    return get_debug_logger()


class ResponseHandler:
    """
    Maps HTTP responses to parsed JSON or UpstreamError.

    Handles:
        - non-2xx status → UpstreamError("<label> failed <status>")
        - Graph error body message appended when present
        - non-JSON / non-object body → UpstreamError
    """

    @staticmethod
    def _graph_error_message(body: Dict[str, Any]) -> str:
        error = body.get("error")
        if isinstance(error, dict):
            message = error.get("message", "")
            code = error.get("code")
            if message and code:
                return f"{message} (code {code})"
            return message
        if isinstance(error, str):
            return error
        return ""

    def handle(self, response, label: str, endpoint: str = "") -> Dict[str, Any]:
        """
        Parse HTTP response.

        Args:
            response: curl_cffi Response object
            label: Call name for messages ("oEmbed", "Media fetch")
            endpoint: URL, for diagnostics

        Returns:
            Parsed JSON dict

        Raises:
            UpstreamError
        """
        status = response.status_code

        # ─── Non-success status ───────────────────────────────
        if not 200 <= status < 300:
            try:
                body = response.json()
            except Exception:
                body = {}
            if not isinstance(body, dict):
                body = {}

            detail = self._graph_error_message(body)
            message = f"{label} failed {status}"
            if detail:
                message = f"{message}: {detail}"

            _dbg().error(
                error_type="UpstreamError",
                status_code=status,
                endpoint=endpoint,
                message=detail,
                response_preview="" if body else (response.text or "")[:200],
            )
            logger.warning(message)
            raise UpstreamError(message, status_code=status, response=body)

        # ─── Parse JSON ───────────────────────────────────────
        try:
            data = response.json()
        except Exception:
            _dbg().error(
                error_type="JSONParseError",
                status_code=status,
                endpoint=endpoint,
                message="Failed to parse JSON response",
                response_preview=(response.text or "")[:100],
            )
            raise UpstreamError(f"{label} returned invalid JSON", status_code=status)

        if not isinstance(data, dict):
            raise UpstreamError(
                f"{label} returned unexpected payload ({type(data).__name__})",
                status_code=status,
            )

        return data
