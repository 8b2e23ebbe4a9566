"""Self-update support backed by the GitHub Releases API.

The latest release tag is compared with the running version; upgrading
re-installs the package from that tag with pip in the current interpreter.
"""
from __future__ import annotations

import logging
import subprocess
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import httpx

from .config import AppConfig
from .errors import NetworkError, UpdateError
from .network import fetch_json

logger = logging.getLogger(__name__)

DEV_VERSION = "dev"


def _strip_v(version: str) -> str:
    return version[1:] if version.startswith("v") else version


@dataclass(slots=True)
class UpdateResult:
    current_version: str
    latest_version: str
    update_available: bool


@dataclass(slots=True)
class UpdateManager:
    """Check for and install newer qrgen releases."""

    config: AppConfig = field(default_factory=AppConfig)
    client: Optional[httpx.Client] = None
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run

    def latest_release(self) -> Dict[str, Any]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": f"{self.config.app_name}-updater",
        }
        try:
            release = fetch_json(
                self.config.latest_release_url,
                timeout=self.config.api_timeout_s,
                headers=headers,
                client=self.client,
            )
        except NetworkError as exc:
            if exc.status_code in (403, 429):
                raise UpdateError("GitHub API rate limit exceeded, try again later") from exc
            if exc.status_code is not None:
                raise UpdateError(f"GitHub API returned status {exc.status_code}") from exc
            raise UpdateError(f"failed to reach GitHub API: {exc}") from exc

        if not isinstance(release, dict) or not release.get("tag_name"):
            raise UpdateError("failed to parse GitHub API response")
        return release

    def check_for_update(self, current_version: str) -> UpdateResult:
        release = self.latest_release()
        latest = _strip_v(str(release["tag_name"]))
        current = _strip_v(current_version)
        return UpdateResult(
            current_version=current,
            latest_version=latest,
            update_available=latest != current and current != DEV_VERSION,
        )

    def upgrade_command(self, tag: str) -> List[str]:
        return [
            sys.executable,
            "-m",
            "pip",
            "install",
            "--upgrade",
            f"git+{self.config.repo_url}@{tag}",
        ]

    def self_update(self, current_version: str) -> str:
        """Install the latest release and return its version."""

        release = self.latest_release()
        tag = str(release["tag_name"])
        latest = _strip_v(tag)
        current = _strip_v(current_version)

        if current == DEV_VERSION:
            raise UpdateError(
                "cannot update a development build, install a released version first"
            )
        if latest == current:
            raise UpdateError(f"already up to date (v{current})")

        command = self.upgrade_command(tag)
        logger.info("Upgrading %s to v%s", self.config.app_name, latest)
        try:
            completed = self.runner(
                command,
                capture_output=True,
                text=True,
                timeout=self.config.upgrade_timeout_s,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise UpdateError("pip upgrade timed out") from exc
        except OSError as exc:
            raise UpdateError(f"failed to run pip: {exc}") from exc

        if completed.returncode != 0:
            detail = (completed.stderr or "").strip().splitlines()
            message = detail[-1] if detail else f"exit code {completed.returncode}"
            raise UpdateError(f"failed to install update: {message}")

        return latest


__all__ = ["DEV_VERSION", "UpdateResult", "UpdateManager"]
