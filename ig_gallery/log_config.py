"""
Logging Configuration + DebugLogger
====================================
Handlers for the "ig_gallery" logger tree, with logger names shortened
to their component ("resolver", "client").

DebugLogger: structured, emoji-coded debug output for the two
Graph API calls made per row. Activated with debug=True in Gallery().
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Dict, Optional


# Console / file format. %(component)s is the logger name without "ig_gallery."
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(component)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Debug format: DebugLogger lines only carry their own emoji prefix
DEBUG_FORMAT = "%(asctime)s %(message)s"
DEBUG_DATE_FORMAT = "%H:%M:%S"

ROOT_LOGGER = "ig_gallery"

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 2

# Query parameters never printed in full
SECRET_PARAMS = {"access_token"}


class ComponentFormatter(logging.Formatter):
    """'ig_gallery.resolver' → 'resolver', so rows and requests line up."""

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(ROOT_LOGGER + "."):
            name = name[len(ROOT_LOGGER) + 1:]
        record.component = name
        return super().format(record)


class LogConfig:
    """
    Handlers for the "ig_gallery" logger tree.

    Usage:
        LogConfig.configure(level="INFO", filename="gallery.log")
        LogConfig.configure(debug=True)
    """

    @classmethod
    def configure(
        cls,
        level: str = "WARNING",
        filename: Optional[str] = None,
        debug: bool = False,
    ) -> logging.Logger:
        """
        Replace the handlers on the root ig_gallery logger.

        Args:
            level: Log level name; ignored when debug=True
            filename: Also write to this file (rotated at 5MB)
            debug: DEBUG level with the compact DebugLogger format

        Returns:
            Root ig_gallery logger
        """
        root = logging.getLogger(ROOT_LOGGER)
        if debug:
            root.setLevel(logging.DEBUG)
            formatter = logging.Formatter(DEBUG_FORMAT, datefmt=DEBUG_DATE_FORMAT)
        else:
            root.setLevel(getattr(logging, level.upper(), logging.WARNING))
            formatter = ComponentFormatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()

        handlers = [logging.StreamHandler(sys.stderr)]
        if filename:
            handlers.append(RotatingFileHandler(
                filename,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            ))
        for handler in handlers:
            handler.setFormatter(formatter)
            root.addHandler(handler)

        root.propagate = False
        return root


class DebugLogger:
    """
    Structured debug logger for ig_gallery.

    Categories:
        🔵 REQUEST   — outgoing Graph API request
        🟢 RESPONSE  — response status, timing, size
        🔴 ERROR     — error details
        🟡 CONFIG    — credential presence (masked)

    Usage:
        dbg = DebugLogger(enabled=True)
        dbg.request("GET", "https://graph.facebook.com/v19.0/instagram_oembed", params)
        dbg.response(200, elapsed_ms=245, size_bytes=1200)
    """

    def __init__(self, enabled: bool = False, log_file: Optional[str] = None):
        self.enabled = enabled
        self._logger = logging.getLogger("ig_gallery.debug")
        if enabled:
            LogConfig.configure(filename=log_file, debug=True)

    @staticmethod
    def _mask(value: str, show: int = 6) -> str:
        """Mask sensitive values, showing only first N chars."""
        if not value:
            return "<empty>"
        if len(value) <= show:
            return value
        return value[:show] + "***"

    @classmethod
    def _safe_params(cls, params: Dict) -> Dict:
        safe = {}
        for key, value in params.items():
            if key in SECRET_PARAMS:
                safe[key] = cls._mask(str(value))
            elif isinstance(value, str) and len(value) > 60:
                safe[key] = value[:60] + "..."
            else:
                safe[key] = value
        return safe

    @staticmethod
    def _format_size(size_bytes: int) -> str:
        if size_bytes < 1024:
            return f"{size_bytes}B"
        elif size_bytes < 1024 * 1024:
            return f"{size_bytes / 1024:.1f}KB"
        else:
            return f"{size_bytes / (1024 * 1024):.1f}MB"

    @staticmethod
    def _short(url: str) -> str:
        return url.replace("https://graph.facebook.com", "")

    # ─── REQUEST ─────────────────────────────────────────────

    def request(self, method: str, url: str, params: Optional[Dict] = None) -> None:
        """Log outgoing HTTP request."""
        if not self.enabled:
            return

        parts = [f"🔵 REQUEST {method} {self._short(url)}"]
        if params:
            parts.append(f"params={self._safe_params(params)}")

        self._logger.debug(" | ".join(parts))

    # ─── RESPONSE ────────────────────────────────────────────

    def response(
        self,
        status_code: int,
        elapsed_ms: float,
        size_bytes: int = 0,
        url: str = "",
    ) -> None:
        """Log HTTP response."""
        if not self.enabled:
            return

        status_emoji = "🟢" if 200 <= status_code < 300 else "🟡"
        parts = [f"{status_emoji} RESPONSE {status_code}"]
        if url:
            parts.append(self._short(url))
        parts.append(f"{elapsed_ms:.0f}ms")
        if size_bytes:
            parts.append(self._format_size(size_bytes))

        self._logger.debug(" | ".join(parts))

    # ─── ERROR ───────────────────────────────────────────────

    def error(
        self,
        error_type: str,
        status_code: int = 0,
        endpoint: str = "",
        message: str = "",
        response_preview: str = "",
    ) -> None:
        """Log error with diagnostics."""
        if not self.enabled:
            return

        parts = [f"🔴 ERROR {error_type}"]
        if status_code:
            parts.append(f"HTTP {status_code}")
        if endpoint:
            parts.append(self._short(endpoint))
        if message:
            parts.append(f"msg={message[:120]}")
        if response_preview:
            parts.append(f"body={response_preview[:200]}")

        self._logger.debug(" | ".join(parts))

    # ─── CONFIG ──────────────────────────────────────────────

    def credentials(self, app_id: str = "", client_token: str = "", access_token: str = "") -> None:
        """Log which credentials are present (values masked)."""
        if not self.enabled:
            return

        parts = ["🟡 CONFIG"]
        parts.append(f"app_id={self._mask(app_id)}")
        parts.append(f"client_token={self._mask(client_token, 4)}")
        parts.append(f"access_token={self._mask(access_token, 4)}")

        self._logger.debug(" | ".join(parts))


# ─── Global debug logger singleton ────────────────────────────
_debug_logger: Optional[DebugLogger] = None


def get_debug_logger() -> DebugLogger:
    """Get the global DebugLogger instance."""
    global _debug_logger
    if _debug_logger is None:
        _debug_logger = DebugLogger(enabled=False)
    return _debug_logger


def set_debug_logger(logger: DebugLogger) -> None:
    """Set the global DebugLogger instance."""
    global _debug_logger
    _debug_logger = logger
