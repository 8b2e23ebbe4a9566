from __future__ import annotations

import subprocess
import sys

import httpx
import pytest

from qrgen.config import AppConfig
from qrgen.errors import NetworkError, UpdateError
from qrgen.network import fetch_json
from qrgen.updater import UpdateManager


def make_client(status: int = 200, payload=None, *, text=None) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/repos/DalyChouikh/qr-code-generator/releases/latest"
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=payload if payload is not None else {})

    return httpx.Client(transport=httpx.MockTransport(handler))


class FakeRunner:
    def __init__(self, returncode: int = 0, stderr: str = "", error: Exception | None = None):
        self.returncode = returncode
        self.stderr = stderr
        self.error = error
        self.commands = []

    def __call__(self, command, **kwargs):
        self.commands.append((command, kwargs))
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(command, self.returncode, stdout="", stderr=self.stderr)


def test_fetch_json_returns_decoded_body():
    client = make_client(payload={"tag_name": "v1.2.0"})

    assert fetch_json(AppConfig().latest_release_url, client=client) == {"tag_name": "v1.2.0"}


def test_fetch_json_keeps_status_code():
    with pytest.raises(NetworkError) as excinfo:
        fetch_json(AppConfig().latest_release_url, client=make_client(404))

    assert excinfo.value.status_code == 404


def test_fetch_json_rejects_invalid_json():
    with pytest.raises(NetworkError):
        fetch_json(AppConfig().latest_release_url, client=make_client(text="<html>"))


def test_fetch_json_wraps_transport_errors():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    with pytest.raises(NetworkError) as excinfo:
        fetch_json("https://example.invalid/", client=client)

    assert excinfo.value.status_code is None


@pytest.mark.parametrize(
    "tag, current, available",
    [
        ("v1.2.0", "1.1.0", True),
        ("v1.1.0", "1.1.0", False),
        ("1.1.0", "v1.1.0", False),
        ("v1.2.0", "dev", False),
    ],
)
def test_check_for_update(tag, current, available):
    manager = UpdateManager(client=make_client(payload={"tag_name": tag}))

    result = manager.check_for_update(current)

    assert result.update_available is available
    assert result.latest_version == tag.lstrip("v")


@pytest.mark.parametrize(
    "status, message",
    [
        (403, "GitHub API rate limit exceeded, try again later"),
        (429, "GitHub API rate limit exceeded, try again later"),
        (500, "GitHub API returned status 500"),
    ],
)
def test_api_errors_become_update_errors(status, message):
    manager = UpdateManager(client=make_client(status))

    with pytest.raises(UpdateError) as excinfo:
        manager.check_for_update("1.0.0")

    assert str(excinfo.value) == message


def test_missing_tag_is_a_parse_error():
    manager = UpdateManager(client=make_client(payload={"name": "release"}))

    with pytest.raises(UpdateError, match="parse"):
        manager.check_for_update("1.0.0")


def test_self_update_runs_pip_from_tag():
    runner = FakeRunner()
    manager = UpdateManager(client=make_client(payload={"tag_name": "v1.2.0"}), runner=runner)

    assert manager.self_update("1.1.0") == "1.2.0"

    command, kwargs = runner.commands[0]
    assert command == [
        sys.executable,
        "-m",
        "pip",
        "install",
        "--upgrade",
        "git+https://github.com/DalyChouikh/qr-code-generator@v1.2.0",
    ]
    assert kwargs["timeout"] == AppConfig().upgrade_timeout_s
    assert kwargs["check"] is False


def test_self_update_refuses_dev_and_current_versions():
    runner = FakeRunner()
    manager = UpdateManager(client=make_client(payload={"tag_name": "v1.1.0"}), runner=runner)

    with pytest.raises(UpdateError, match="development build"):
        manager.self_update("dev")
    with pytest.raises(UpdateError, match="already up to date"):
        manager.self_update("1.1.0")
    assert runner.commands == []


def test_self_update_reports_pip_failure():
    runner = FakeRunner(returncode=1, stderr="Collecting...\nERROR: no network\n")
    manager = UpdateManager(client=make_client(payload={"tag_name": "v2.0.0"}), runner=runner)

    with pytest.raises(UpdateError) as excinfo:
        manager.self_update("1.1.0")

    assert str(excinfo.value) == "failed to install update: ERROR: no network"


def test_self_update_reports_timeout():
    runner = FakeRunner(error=subprocess.TimeoutExpired(["pip"], 300))
    manager = UpdateManager(client=make_client(payload={"tag_name": "v2.0.0"}), runner=runner)

    with pytest.raises(UpdateError, match="timed out"):
        manager.self_update("1.1.0")
