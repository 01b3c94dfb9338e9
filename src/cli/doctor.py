"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.tumblr_client import TumblrClient
from core.config import TumblrSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

CHECK_BLOG = "staff"


def _check_api(settings: TumblrSettings) -> tuple[bool, str]:
    """Best-effort: pide `blog/staff/info` y reporta el status del envelope."""

    try:
        with TumblrClient.from_settings(settings) as client:
            response, envelope = client.do(
                client.new_request("GET", f"blog/{CHECK_BLOG}.tumblr.com/info"),
                dict,
            )
    except Exception as exc:
        return False, str(exc)

    if envelope is not None and envelope.meta is not None:
        return envelope.ok, f"HTTP {response.status_code} / meta {envelope.meta.status} {envelope.meta.msg}"
    return response.is_success, f"HTTP {response.status_code}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = TumblrSettings()

    table = Table(title="tumblr-d2 Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("User-Agent", "OK", settings.user_agent)
    if settings.client_id:
        table.add_row("Client ID", "OK", "Sent as `client_id`")
    else:
        table.add_row("Client ID", "MISSING", "Public blog endpoints will answer 401")
    table.add_row(
        "Client secret",
        "OK" if settings.client_secret else "OPTIONAL",
        "Sent as `client_secret`" if settings.client_secret else "Not set",
    )
    table.add_row(
        "Access token",
        "OK" if settings.access_token else "OPTIONAL",
        "User endpoints enabled" if settings.access_token else "No token -> `user` commands will fail",
    )
    table.add_row("Strict status", "ON" if settings.strict_status else "OFF", "Non-2xx raise ApiError")

    # Connectivity (best-effort)
    ok_api, detail_api = _check_api(settings)
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", escape(detail_api))

    _console.print(table)

    if not settings.client_id:
        _console.print("\n[yellow]Note:[/yellow] run `doctor setup` to store your OAuth application credentials.")


@app.command(name="setup")
def setup() -> None:
    """Interactive credential setup (stores config in the user config .env)."""

    client_id = typer.prompt("OAuth consumer key (client_id)").strip()
    client_secret = typer.prompt(
        "OAuth consumer secret (client_secret, empty to skip)",
        default="",
        show_default=False,
        hide_input=True,
    ).strip()
    access_token = typer.prompt(
        "Access token (empty to skip)",
        default="",
        show_default=False,
        hide_input=True,
    ).strip()

    if not client_id:
        raise typer.BadParameter("client_id is required")

    env_path = write_user_env_vars(
        {
            "TUMBLR_CLIENT_ID": client_id,
            "TUMBLR_CLIENT_SECRET": client_secret or None,
            "TUMBLR_ACCESS_TOKEN": access_token or None,
        }
    )

    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
