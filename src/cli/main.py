"""CLI de tumblr-d2 (Typer + Rich).

Por qué aquí:
- Es un consumidor más de la librería: arma `TumblrSettings`, construye el
  cliente con `TumblrClient.from_settings` y presenta los envelopes.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional, TypeVar

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from adapters.tumblr_client import TumblrClient
from cli import doctor
from cli.ui_components import build_blog_panel, build_posts_table, print_banner
from core.config import TumblrSettings
from core.domain.models import Envelope
from core.errors import TumblrError

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Minimal client for the Tumblr v2 API.")
blog_app = typer.Typer(no_args_is_help=True, help="Blog endpoints (blog/<identifier>/...).")
user_app = typer.Typer(no_args_is_help=True, help="Authenticated user endpoints (needs access token).")

app.add_typer(blog_app, name="blog")
app.add_typer(user_app, name="user")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def get_client() -> TumblrClient:
    return TumblrClient.from_settings(TumblrSettings())


def _call(fn: Callable[[TumblrClient], Envelope[T]]) -> Envelope[T]:
    """Ejecuta una llamada y traduce errores a un mensaje + exit code 1."""

    with get_client() as client:
        try:
            envelope = fn(client)
        except (TumblrError, httpx.HTTPError, ValueError) as exc:
            _console.print(f"[red]Error:[/red] {escape(str(exc))}")
            raise typer.Exit(code=1) from exc

    if envelope.meta is not None and not envelope.ok:
        _console.print(f"[yellow]API status {envelope.meta.status}:[/yellow] {escape(envelope.meta.msg)}")
    return envelope


def _print_json(envelope: Envelope[Any]) -> None:
    payload = envelope.model_dump(mode="json").get("response")
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging (credentials are redacted)."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@blog_app.command("info")
def blog_info(
    blog: str = typer.Argument(..., help="Blog name or domain (e.g. 'staff')."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw payload as JSON."),
) -> None:
    """Public info of a blog."""

    envelope = _call(lambda c: c.blog.info(blog))
    if as_json:
        _print_json(envelope)
        return
    if envelope.response is not None:
        _console.print(build_blog_panel(envelope.response.blog))


@blog_app.command("posts")
def blog_posts(
    blog: str = typer.Argument(..., help="Blog name or domain."),
    post_type: Optional[str] = typer.Option(None, "--type", help="text, photo, quote, link, chat, audio, video, answer."),
    tag: Optional[str] = typer.Option(None, "--tag", help="Only posts with this tag."),
    limit: int = typer.Option(20, "--limit", min=1, max=20),
    offset: Optional[int] = typer.Option(None, "--offset", min=0),
    as_json: bool = typer.Option(False, "--json", help="Print the raw payload as JSON."),
) -> None:
    """Published posts of a blog."""

    envelope = _call(lambda c: c.blog.posts(blog, type=post_type, tag=tag, limit=limit, offset=offset))
    if as_json:
        _print_json(envelope)
        return
    if envelope.response is not None:
        title = f"{blog} ({envelope.response.total_posts} posts)"
        _console.print(build_posts_table(envelope.response.posts, title=title))


@blog_app.command("avatar")
def blog_avatar(
    blog: str = typer.Argument(..., help="Blog name or domain."),
    size: int = typer.Option(64, "--size", help="16, 24, 30, 40, 48, 64, 96, 128 or 512."),
) -> None:
    """Print the avatar URL of a blog."""

    envelope = _call(lambda c: c.blog.avatar(blog, size=size))
    if envelope.response is not None:
        typer.echo(envelope.response.avatar_url)


@app.command("tagged")
def tagged(
    tag: str = typer.Argument(..., help="Tag to search."),
    limit: int = typer.Option(20, "--limit", min=1, max=20),
    before: Optional[int] = typer.Option(None, "--before", help="Epoch timestamp (manual paging)."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw payload as JSON."),
) -> None:
    """Public posts tagged with TAG."""

    envelope = _call(lambda c: c.tagged.get(tag, before=before, limit=limit))
    if as_json:
        _print_json(envelope)
        return
    _console.print(build_posts_table(envelope.response or [], title=f"#{tag}"))


@user_app.command("info")
def user_info(
    as_json: bool = typer.Option(False, "--json", help="Print the raw payload as JSON."),
) -> None:
    """Info of the authenticated user."""

    envelope = _call(lambda c: c.users.info())
    if as_json:
        _print_json(envelope)
        return
    if envelope.response is not None:
        user = envelope.response.user
        _console.print(f"[bold cyan]{user.name}[/bold cyan]  likes={user.likes} following={user.following}")
        for blog in user.blogs:
            _console.print(build_blog_panel(blog))


@user_app.command("dashboard")
def user_dashboard(
    limit: int = typer.Option(20, "--limit", min=1, max=20),
    as_json: bool = typer.Option(False, "--json", help="Print the raw payload as JSON."),
) -> None:
    """Dashboard of the authenticated user."""

    envelope = _call(lambda c: c.users.dashboard(limit=limit))
    if as_json:
        _print_json(envelope)
        return
    if envelope.response is not None:
        _console.print(build_posts_table(envelope.response.posts, title="Dashboard"))


@app.command("version")
def version() -> None:
    """Show banner and version."""

    print_banner(_console)


def run() -> None:
    app()
