"""
Credentials
===========
The three Graph API values needed to resolve a row:

    IG_APP_ID        — Meta app ID            (oEmbed lookup)
    IG_CLIENT_TOKEN  — app client token       (oEmbed lookup)
    IG_ACCESS_TOKEN  — user/page access token (media fetch)

Loaded once from the environment (optionally a .env file) and passed
explicitly into the media source.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from .config import (
    APP_TOKEN_SEPARATOR,
    ENV_ACCESS_TOKEN,
    ENV_APP_ID,
    ENV_CLIENT_TOKEN,
)
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    app_id: str = ""
    client_token: str = field(default="", repr=False)
    access_token: str = field(default="", repr=False)

    @classmethod
    def from_env(cls, env_path: str = ".env") -> "Credentials":
        """
        Read credentials from the process environment.
        If env_path exists it is loaded first (overriding existing values).
        """
        env_file = Path(env_path)
        if env_file.exists():
            load_dotenv(env_file, override=True)

        return cls(
            app_id=os.getenv(ENV_APP_ID, ""),
            client_token=os.getenv(ENV_CLIENT_TOKEN, ""),
            access_token=os.getenv(ENV_ACCESS_TOKEN, ""),
        )

    @property
    def missing(self) -> List[str]:
        """Environment variable names with no value."""
        pairs = (
            (ENV_APP_ID, self.app_id),
            (ENV_CLIENT_TOKEN, self.client_token),
            (ENV_ACCESS_TOKEN, self.access_token),
        )
        return [name for name, value in pairs if not value]

    @property
    def app_token(self) -> str:
        """oEmbed access token: "<app_id>|<client_token>"."""
        return f"{self.app_id}{APP_TOKEN_SEPARATOR}{self.client_token}"

    def require_app_token(self) -> str:
        if not self.app_id or not self.client_token:
            raise ConfigurationError(
                f"Missing {ENV_APP_ID}/{ENV_CLIENT_TOKEN}",
                missing=[n for n in self.missing if n != ENV_ACCESS_TOKEN],
            )
        return self.app_token

    def require_access_token(self) -> str:
        if not self.access_token:
            raise ConfigurationError(f"Missing {ENV_ACCESS_TOKEN}", missing=[ENV_ACCESS_TOKEN])
        return self.access_token

    def validate(self) -> "Credentials":
        """
        Raises:
            ConfigurationError: naming every missing variable
        """
        missing = self.missing
        if missing:
            raise ConfigurationError(f"Missing {'/'.join(missing)}", missing=missing)
        return self
