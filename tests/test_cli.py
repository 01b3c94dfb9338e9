from __future__ import annotations

import json

import httpx
import pytest
from typer.testing import CliRunner

from adapters import tumblr_client
from adapters.http_client import build_client
from cli import doctor
from cli import main as cli_main
from core.config import TumblrSettings
from tests.conftest import envelope_json

runner = CliRunner()

BLOG = {"name": "staff", "title": "Tumblr Staff", "url": "https://staff.tumblr.com/", "posts": 10}
POSTS = [{"id": 123, "blog_name": "staff", "type": "text", "tags": ["cats"], "post_url": "https://x/123"}]


@pytest.fixture
def use_handler(make_client, monkeypatch: pytest.MonkeyPatch):
    def install(handler):
        client, recorder = make_client(handler, client_id="abc")
        monkeypatch.setattr(cli_main, "get_client", lambda: client)
        return recorder

    return install


def test_blog_info_json(use_handler) -> None:
    recorder = use_handler(lambda request: httpx.Response(200, json=envelope_json({"blog": BLOG})))

    result = runner.invoke(cli_main.app, ["blog", "info", "staff", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["blog"]["name"] == "staff"
    assert recorder.last.url.path == "/v2/blog/staff.tumblr.com/info"


def test_blog_info_panel(use_handler) -> None:
    use_handler(lambda request: httpx.Response(200, json=envelope_json({"blog": BLOG})))

    result = runner.invoke(cli_main.app, ["blog", "info", "staff"])

    assert result.exit_code == 0, result.output
    assert "Tumblr Staff" in result.output


def test_blog_posts_table(use_handler) -> None:
    payload = {"blog": BLOG, "posts": POSTS, "total_posts": 1}
    recorder = use_handler(lambda request: httpx.Response(200, json=envelope_json(payload)))

    result = runner.invoke(cli_main.app, ["blog", "posts", "staff", "--tag", "cats", "--limit", "5"])

    assert result.exit_code == 0, result.output
    assert "123" in result.output
    assert recorder.last.url.params["tag"] == "cats"
    assert recorder.last.url.params["limit"] == "5"


def test_tagged_table(use_handler) -> None:
    recorder = use_handler(lambda request: httpx.Response(200, json=envelope_json(POSTS)))

    result = runner.invoke(cli_main.app, ["tagged", "cats"])

    assert result.exit_code == 0, result.output
    assert "123" in result.output
    assert recorder.last.url.params["tag"] == "cats"


def test_avatar_prints_url(use_handler) -> None:
    use_handler(lambda request: httpx.Response(200, json=envelope_json({"avatar_url": "https://x/a.png"})))

    result = runner.invoke(cli_main.app, ["blog", "avatar", "staff", "--size", "96"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "https://x/a.png"


def test_decode_error_exits_with_code_1(use_handler) -> None:
    use_handler(lambda request: httpx.Response(502, text="Bad Gateway"))

    result = runner.invoke(cli_main.app, ["user", "info"])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_transport_error_exits_with_code_1(use_handler) -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    use_handler(fail)

    result = runner.invoke(cli_main.app, ["user", "dashboard"])

    assert result.exit_code == 1
    assert "timed out" in result.output


def test_api_status_is_reported(use_handler) -> None:
    body = envelope_json([], status=401, msg="Unauthorized")
    body["errors"] = [{"title": "Unauthorized", "code": 1016, "detail": "Unable to authorize"}]
    use_handler(lambda request: httpx.Response(401, json=body))

    result = runner.invoke(cli_main.app, ["user", "dashboard"])

    assert result.exit_code == 0, result.output
    assert "Unauthorized" in result.output


@pytest.fixture
def doctor_transport(monkeypatch: pytest.MonkeyPatch):
    def install(handler):
        monkeypatch.setattr(
            tumblr_client,
            "build_client",
            lambda settings: build_client(settings, transport=httpx.MockTransport(handler)),
        )

    return install


def test_check_api_reports_envelope_status(doctor_transport) -> None:
    doctor_transport(lambda request: httpx.Response(200, json=envelope_json({"blog": BLOG})))

    ok, detail = doctor._check_api(TumblrSettings(_env_file=None, client_id="abc"))

    assert ok is True
    assert detail == "HTTP 200 / meta 200 OK"


def test_check_api_reports_unauthorized(doctor_transport) -> None:
    doctor_transport(lambda request: httpx.Response(401, json=envelope_json([], status=401, msg="Unauthorized")))

    ok, detail = doctor._check_api(TumblrSettings(_env_file=None))

    assert ok is False
    assert detail == "HTTP 401 / meta 401 Unauthorized"


def test_check_api_reports_plain_http_errors(doctor_transport) -> None:
    doctor_transport(lambda request: httpx.Response(503, text="Service Unavailable"))

    ok, detail = doctor._check_api(TumblrSettings(_env_file=None))

    assert ok is False
    assert "HTTP 503" in detail


def test_check_api_reports_transport_errors(doctor_transport) -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("name resolution failed", request=request)

    doctor_transport(fail)

    ok, detail = doctor._check_api(TumblrSettings(_env_file=None))

    assert ok is False
    assert detail == "name resolution failed"


def test_doctor_run(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TUMBLR_CLIENT_ID", "abc")
    monkeypatch.setattr(doctor, "_check_api", lambda settings: (True, "HTTP 200"))

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "HTTP 200" in result.output
    assert "Client ID" in result.output


def test_doctor_run_reports_unauthorized_envelope(monkeypatch: pytest.MonkeyPatch, doctor_transport) -> None:
    monkeypatch.delenv("TUMBLR_CLIENT_ID", raising=False)
    doctor_transport(lambda request: httpx.Response(401, json=envelope_json([], status=401, msg="Unauthorized")))

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "FAIL" in result.output
    assert "Unauthorized" in result.output


def test_doctor_setup_writes_user_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    written: dict[str, object] = {}

    def fake_write(values):
        written.update(values)
        return tmp_path / ".env"

    monkeypatch.setattr(doctor, "write_user_env_vars", fake_write)

    result = runner.invoke(cli_main.app, ["doctor", "setup"], input="abc\nsec\n\n")

    assert result.exit_code == 0, result.output
    assert written == {
        "TUMBLR_CLIENT_ID": "abc",
        "TUMBLR_CLIENT_SECRET": "sec",
        "TUMBLR_ACCESS_TOKEN": None,
    }


def test_version_banner() -> None:
    result = runner.invoke(cli_main.app, ["version"])

    assert result.exit_code == 0
    assert "tumblr-d2" in result.output
