"""
Main CLI interface for ytmusic-shell

This module provides the command-line surface over the YouTube Music service
facade: authentication status, the home feed, song search, playlist/album
browsing, stream URL resolution and configuration inspection.

The CLI is built using Click framework and provides:
- Data commands (home, search, playlist, stream) with optional JSON output
- Authentication status (auth status)
- Configuration display (config show)
"""

import json
import sys
import click
import functools

from . import __version__
from .config.settings import get_settings, reload_settings
from .ytmusic.service import NOT_LOGGED_IN, ServiceResult, YTMusicService
from .ytmusic.stream import resolve_stream_url
from .utils.helpers import truncate_string
from .utils.logger import configure_from_settings, get_logger, get_current_log_file
from .utils.validation import validate_search_query, validate_browse_id, validate_video_id


# Initialize logging system from configuration settings
configure_from_settings()
logger = get_logger(__name__)


def print_banner():
    """Print application banner to console"""
    banner = """
╔═══════════════════════════════════════════════════════════════╗
║                         ytmusic-shell                         ║
║                                                               ║
║        Browse and search YouTube Music from a terminal        ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝
    """
    click.echo(click.style(banner, fg='green', bold=True))


def handle_error(func):
    """
    Decorator to handle common CLI errors gracefully

    Args:
        func: The CLI command function to wrap

    Returns:
        Wrapped function with error handling
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo(click.style("\n\nOperation cancelled by user", fg='yellow'))
            sys.exit(130)
        except Exception as e:
            logger.error(f"Command failed: {e}")
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            sys.exit(1)
    return wrapper


def fail(message: str) -> None:
    """Print an error line and exit with status 1"""
    click.echo(click.style(message, fg='red'), err=True)
    sys.exit(1)


def emit_result(result: ServiceResult, as_json: bool, render) -> None:
    """
    Print a service result, exiting with status 1 on error

    Args:
        result: Facade result
        as_json: Print the JSON envelope instead of text
        render: Callable printing ``result.data`` as text
    """
    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        if not result.ok:
            sys.exit(1)
        return

    if result.error == NOT_LOGGED_IN:
        fail("Not logged in. Set auth.cookie_file (or YTMUSIC_COOKIE_FILE) "
             "to a cookies.txt export of a logged-in browser session")
    if not result.ok:
        fail(f"Error: {result.error}")
    render(result.data)


def format_item(item, index: int) -> str:
    """One-line text rendering of a media item"""
    label = click.style(f"[{item.kind.value}]", fg='cyan')
    ident = item.video_id or item.browse_target or ''
    subtitle = f" - {truncate_string(item.subtitle, 60)}" if item.subtitle else ''
    return f"{index:3d}. {label} {item.title}{subtitle}  ({ident})"


def get_service() -> YTMusicService:
    """Service facade bound to the current settings"""
    return YTMusicService()


# Main CLI group - root command that all subcommands attach to
@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--config', type=click.Path(), help='Path to config file')
@click.option('--cookies', type=click.Path(), help='Path to a cookies.txt export')
@click.pass_context
def cli(ctx, version, verbose, config, cookies):
    """
    ytmusic-shell - YouTube Music from the command line

    Uses the cookies of a logged-in browser session to read your personalized
    home feed, search songs and open playlists and albums.
    """
    ctx.ensure_object(dict)

    if version:
        click.echo(f"ytmusic-shell v{__version__}")
        return

    if config:
        reload_settings(config)
        configure_from_settings()
        click.echo(f"Loaded config: {config}")

    if cookies:
        get_settings().auth.cookie_file = cookies

    if verbose:
        ctx.obj['verbose'] = True
        logger.console_info("Verbose mode enabled")

    # Data commands refuse unusable settings; "config show" still reports them
    if ctx.invoked_subcommand not in (None, 'config') and not get_settings().validate():
        fail("Invalid configuration, run 'ytm-shell config show' for details")

    if ctx.invoked_subcommand is None:
        print_banner()
        click.echo(ctx.get_help())


@cli.command()
@click.option('--json', 'as_json', is_flag=True, help='Print raw JSON result')
@handle_error
def home(as_json):
    """Show the personalized home feed"""
    def render(shelves):
        if not shelves:
            click.echo("Home feed is empty")
            return
        for shelf in shelves:
            click.echo(click.style(f"\n{shelf.title}", bold=True))
            for index, item in enumerate(shelf.items, 1):
                click.echo(format_item(item, index))

    emit_result(get_service().get_home(), as_json, render)


@cli.command()
@click.argument('query')
@click.option('--json', 'as_json', is_flag=True, help='Print raw JSON result')
@handle_error
def search(query, as_json):
    """
    Search for songs

    Args:
        query: Free-text search query
    """
    is_valid, error_msg = validate_search_query(query)
    if not is_valid:
        fail(f"Invalid query: {error_msg}")

    def render(items):
        if not items:
            click.echo(f"No songs found for '{query}'")
            return
        for index, item in enumerate(items, 1):
            click.echo(format_item(item, index))

    emit_result(get_service().search(query), as_json, render)


@cli.command()
@click.argument('browse_id')
@click.option('--json', 'as_json', is_flag=True, help='Print raw JSON result')
@handle_error
def playlist(browse_id, as_json):
    """
    Show a playlist or album

    BROWSE_ID is an album browse id (MPREb_...) or a playlist browse id.
    Raw playlist ids (PL..., RD..., OLAK...) are prefixed with "VL" first.
    """
    is_valid, error_msg = validate_browse_id(browse_id)
    if not is_valid:
        fail(f"Invalid browse id: {error_msg}")

    def render(detail):
        click.echo(click.style(detail.title or "(untitled)", bold=True))
        if detail.subtitle:
            click.echo(f"   {detail.subtitle}")
        click.echo(f"   Tracks: {detail.track_count}\n")
        for index, track in enumerate(detail.tracks, 1):
            click.echo(format_item(track, index))

    emit_result(get_service().get_playlist_or_album(browse_id), as_json, render)


@cli.command()
@click.argument('video_id')
@handle_error
def stream(video_id):
    """Print a direct audio stream URL for VIDEO_ID"""
    is_valid, error_msg = validate_video_id(video_id)
    if not is_valid:
        fail(f"Invalid video id: {error_msg}")

    click.echo(resolve_stream_url(video_id, get_settings().get_cookie_file()))


# Authentication commands group
@cli.group()
def auth():
    """Session cookie status"""
    pass


@auth.command()
@handle_error
def status():
    """
    Check authentication status

    Reports whether the configured cookies contain a session signing key.
    No request is made, so an expired session can still show as logged in.
    """
    settings = get_settings()
    auth_status = get_service().check_auth()

    cookie_file = settings.get_cookie_file()
    click.echo(f"Cookie file: {cookie_file or 'not configured'}")

    if auth_status.error:
        click.echo(click.style(f"Authentication Status: Unavailable ({auth_status.error})", fg='yellow'))
    elif auth_status.is_authenticated:
        click.echo(click.style("Authentication Status: Logged in", fg='green'))
    else:
        click.echo("Authentication Status: Not logged in")
        click.echo("   Export cookies from a browser logged in to music.youtube.com")


# Configuration commands group
@cli.group()
def config():
    """Configuration management"""
    pass


@config.command()
@handle_error
def show():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:\n")

    click.echo("YouTube Music:")
    click.echo(f"   Client: {settings.ytmusic.client_name} {settings.ytmusic.client_version}")
    click.echo(f"   Locale: {settings.ytmusic.hl} / {settings.ytmusic.gl}")
    click.echo(f"   Thumbnail width: {settings.ytmusic.thumbnail_min_width}-{settings.ytmusic.thumbnail_max_width}px")

    click.echo("\nNetwork:")
    click.echo(f"   Timeout: {settings.network.request_timeout}s")

    click.echo("\nAuthentication:")
    click.echo(f"   Cookie file: {settings.get_cookie_file() or 'not configured'}")
    click.echo(f"   Signing key cookies: {', '.join(settings.auth.signing_key_cookies)}")

    current_log = get_current_log_file()
    click.echo("\nLogging:")
    click.echo(f"   Level: {settings.logging.level}")
    click.echo(f"   File: {current_log or 'console only'}")

    errors = settings.validation_errors()
    click.echo("\nValidation:")
    if errors:
        for error in errors:
            click.echo(click.style(f"   {error}", fg='red'))
    else:
        click.echo("   OK")


# Entry point for module execution
if __name__ == '__main__':
    cli()
