"""Command-line interface for VoiceNav.

Provides ``voicenav serve``, ``status``, ``commands`` and ``match``. The
entry point is registered via ``pyproject.toml`` as
``voicenav = "voicenav.cli:cli"``.
"""

import logging

import click
import httpx

from voicenav.catalog.builder import build_catalog
from voicenav.catalog.topics import DEFAULT_TOPICS
from voicenav.catalog.types import DynamicEntity, Role
from voicenav.config import ACCEPTANCE_THRESHOLD, DEFAULT_ROLE, get_port
from voicenav.matching.fuzzy_matcher import FuzzyMatcher

logger = logging.getLogger(__name__)

_MIN_PORT = 1024
_MAX_PORT = 65535

_ROLE_CHOICE = click.Choice([role.value for role in Role])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_port(port: int | None) -> int:
    """Return the port to use, falling back to env var / default."""
    if port is not None:
        return port
    return get_port()


def _validate_port(port: int) -> None:
    """Raise ``click.BadParameter`` if *port* is out of range."""
    if not (_MIN_PORT <= port <= _MAX_PORT):
        raise click.BadParameter(
            f"Port must be between {_MIN_PORT} and {_MAX_PORT}, got {port}."
        )


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _parse_topics(topics: tuple[str, ...]) -> tuple[DynamicEntity, ...]:
    """Turn ``slug=Title`` options into entities; none means the default topics."""
    if not topics:
        return DEFAULT_TOPICS
    entities = []
    for raw in topics:
        slug, sep, title = raw.partition("=")
        if not sep or not slug.strip() or not title.strip():
            raise click.BadParameter(
                f"Expected slug=Title, got {raw!r}.", param_hint="--topic"
            )
        entities.append(DynamicEntity(slug=slug.strip(), title=title.strip()))
    return tuple(entities)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """VoiceNav -- voice-command navigation for the learning platform."""
    _setup_logging(verbose)


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--port", default=None, type=int, help="Server port (default: 7870)")
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--role", type=_ROLE_CHOICE, default=DEFAULT_ROLE, show_default=True)
@click.option("--no-tts", is_flag=True, help="Disable spoken feedback")
def serve(port: int | None, host: str, role: str, no_tts: bool) -> None:
    """Run the VoiceNav server in the foreground."""
    import uvicorn

    from voicenav.engine import VoiceNavEngine
    from voicenav.feedback.provider_factory import create_synthesizer
    from voicenav.server.app import create_app

    port = _resolve_port(port)
    _validate_port(port)

    if no_tts:
        click.echo("Spoken feedback disabled via --no-tts flag")

    engine = VoiceNavEngine(
        synthesizer=create_synthesizer("none" if no_tts else None),
        role=role,
    )
    click.echo(f"Starting VoiceNav on {host}:{port} (role: {role})...")
    try:
        uvicorn.run(create_app(engine), host=host, port=port, log_level="info")
    except OSError as exc:
        if "address already in use" in str(exc).lower():
            click.echo(
                click.style(
                    f"Port {port} is already in use. Choose a different port with --port.",
                    fg="red",
                )
            )
            raise SystemExit(1)
        raise


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--port", default=None, type=int, help="Server port to check")
def status(port: int | None) -> None:
    """Show VoiceNav server status."""
    port = _resolve_port(port)
    try:
        resp = httpx.get(f"http://127.0.0.1:{port}/health", timeout=2.0)
        data = resp.json()
    except (httpx.HTTPError, OSError, ValueError):
        click.echo(click.style(f"Server is not responding on port {port}.", fg="yellow"))
        raise SystemExit(1)

    click.echo(click.style("Server is healthy.", fg="green"))
    click.echo(f"  Version:   {data.get('version', '?')}")
    click.echo(f"  Role:      {data.get('role', '?')}")
    click.echo(f"  Commands:  {data.get('commands', '?')}")
    click.echo(f"  Supported: {data.get('is_supported', '?')}")
    click.echo(f"  State:     {data.get('state', '?')}")


# ---------------------------------------------------------------------------
# commands
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--role", type=_ROLE_CHOICE, default=DEFAULT_ROLE, show_default=True)
@click.option("--topic", "topics", multiple=True, help="Lesson topic as slug=Title")
def commands(role: str, topics: tuple[str, ...]) -> None:
    """List the phrases recognized for ROLE."""
    catalog = build_catalog(role, _parse_topics(topics))
    for item in catalog.commands:
        click.echo(f"{item.phrase:<45} -> {item.action}")
    click.echo(f"{len(catalog)} commands for {catalog.role.value}")


# ---------------------------------------------------------------------------
# match
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("transcript")
@click.option("--role", type=_ROLE_CHOICE, default=DEFAULT_ROLE, show_default=True)
@click.option("--topic", "topics", multiple=True, help="Lesson topic as slug=Title")
@click.option(
    "--acceptance",
    type=float,
    default=ACCEPTANCE_THRESHOLD,
    show_default=True,
    help="Maximum score that is still executed",
)
@click.option("--limit", type=int, default=5, show_default=True)
def match(
    transcript: str, role: str, topics: tuple[str, ...], acceptance: float, limit: int
) -> None:
    """Score TRANSCRIPT against the catalog for ROLE without opening a microphone."""
    matcher = FuzzyMatcher()
    handle = matcher.index(build_catalog(role, _parse_topics(topics)))
    results = matcher.query(handle, transcript)

    if not results:
        click.echo(click.style(f'Not recognized: "{transcript}"', fg="red"))
        raise SystemExit(1)

    for result in results[:limit]:
        click.echo(f"{result.score:.3f}  {result.command.phrase:<40} -> {result.command.action}")

    best = results[0]
    if best.score < acceptance:
        click.echo(click.style(f"Would execute: {best.command.action}", fg="green"))
    else:
        click.echo(click.style(f'Not recognized: "{transcript}"', fg="red"))
        raise SystemExit(1)
