"""Runtime settings, read once from the environment at process start."""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel

TRUE_VALUES = {"1", "true", "yes", "on"}


def env_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in TRUE_VALUES


class Settings(BaseModel):
    """Publisher configuration (notifications, output locations, feed metadata)."""

    # Email digest
    email_enabled: bool = False
    email_from: str = "calendar@localhost"
    email_to: str = ""
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""

    # Outputs
    output_dir: Path = Path("public")
    snapshot_path: Path = Path("data") / "previous-events.json"

    # Feed
    site_url: str = "your-site.netlify.app"
    timezone: str = "Europe/London"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            email_enabled=env_flag(env.get("EMAIL_NOTIFICATIONS")),
            email_from=env.get("EMAIL_FROM") or defaults.email_from,
            email_to=env.get("EMAIL_TO") or defaults.email_to,
            smtp_host=env.get("SMTP_HOST") or defaults.smtp_host,
            smtp_port=int(env.get("SMTP_PORT") or defaults.smtp_port),
            smtp_user=env.get("SMTP_USER") or defaults.smtp_user,
            smtp_password=env.get("SMTP_PASSWORD") or defaults.smtp_password,
            output_dir=Path(env.get("OUTPUT_DIR") or defaults.output_dir),
            snapshot_path=Path(env.get("SNAPSHOT_PATH") or defaults.snapshot_path),
            site_url=env.get("URL") or defaults.site_url,
            timezone=env.get("CALENDAR_TIMEZONE") or defaults.timezone,
        )

    @property
    def site_host(self) -> str:
        """Site URL without scheme or trailing slash."""
        return self.site_url.split("://", 1)[-1].rstrip("/")
