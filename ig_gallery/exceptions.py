"""
Gallery Exception Classes
"""


class GalleryError(Exception):
    """Base gallery error class"""

    def __init__(self, message: str = "", status_code: int = 0, response: dict = None):
        self.message = message
        self.status_code = status_code
        self.response = response or {}
        super().__init__(self.message)


class ConfigurationError(GalleryError):
    """Required credential missing from configuration"""

    def __init__(self, message: str = "", missing: list = None):
        super().__init__(message)
        self.missing = list(missing or [])


class UpstreamError(GalleryError):
    """Graph API returned a non-success status or an unreadable body"""

    @property
    def error_code(self) -> int:
        """Graph error code from the response body (0 if absent)."""
        error = self.response.get("error", {})
        if isinstance(error, dict):
            return error.get("code", 0) or 0
        return 0


class ResolutionError(GalleryError):
    """oEmbed response did not contain a media identifier"""
    pass


class ValidationError(GalleryError):
    """Malformed request body"""
    pass
