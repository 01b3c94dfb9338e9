"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from datetime import datetime, timezone

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import VERSION
from core.domain.models import Blog, Post


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("tumblr-d2", style="bold cyan")
    subtitle = Text(f"Tumblr API v2 • v{VERSION}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _format_epoch(value: int) -> str:
    if not value:
        return "-"
    return datetime.fromtimestamp(value, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def build_blog_panel(blog: Blog) -> Panel:
    """Panel con la info pública de un blog."""

    body = Text()
    if blog.title:
        body.append(blog.title + "\n", style="bold")
    if blog.description:
        body.append(blog.description.strip() + "\n")
    body.append("\n")
    body.append(f"URL: {blog.url or '-'}\n", style="magenta")
    body.append(f"Posts: {blog.posts}\n")
    if blog.likes is not None:
        body.append(f"Likes: {blog.likes}\n")
    body.append(f"Updated: {_format_epoch(blog.updated)}", style="dim")
    if blog.is_nsfw:
        body.append("\nNSFW", style="red")

    return Panel(body, title=Text(blog.name, style="bold cyan"), border_style="cyan")


def build_posts_table(posts: list[Post], *, title: str = "Posts") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Blog", style="white")
    table.add_column("Type", style="green")
    table.add_column("Date", style="dim")
    table.add_column("Notes", justify="right")
    table.add_column("Tags", style="yellow")
    table.add_column("URL", style="magenta")
    for post in posts:
        table.add_row(
            str(post.id),
            post.blog_name,
            post.type,
            post.date,
            str(post.note_count),
            ", ".join(post.tags),
            post.post_url,
        )
    return table
