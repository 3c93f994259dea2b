"""Command-line interface."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.scalarstring import DoubleQuotedScalarString

from admin_bookmarks import __version__
from admin_bookmarks.config import Config, load_config
from admin_bookmarks.config.plugin import PLUGIN_NAME, has_plugin
from admin_bookmarks.convert import dropdown_to_markdown
from admin_bookmarks.errors import PageStoreUnavailable
from admin_bookmarks.options import DEFAULT_MAX_BOOKMARKS
from admin_bookmarks.pages import DEFAULT_LABEL_SEPARATOR
from admin_bookmarks.widget import AdminBookmarks


class OutputFormat(str, Enum):
    html = "html"
    markdown = "markdown"


def _make_logger(
    quiet: bool, verbose: bool = False
) -> tuple[Callable[..., None], Callable[..., None]]:
    """Create log and log_verbose functions for CLI output.

    Args:
        quiet: If True, suppress all output.
        verbose: If True, enable verbose logging (quiet overrides this).

    Returns:
        Tuple of (log, log_verbose) functions.
    """
    effective_verbose = verbose and not quiet

    def log(msg: str, color: str = "green", err: bool = False) -> None:
        if not quiet:
            typer.secho(msg, fg=color, err=err)

    def log_verbose(msg: str, color: str = "green", err: bool = False) -> None:
        if effective_verbose:
            typer.secho(msg, fg=color, err=err)

    return log, log_verbose


def version_callback(value: bool) -> None:
    """Print version and exit if --version flag is set."""
    if value:
        typer.echo(f"admin-bookmarks {__version__}")
        raise typer.Exit()


def _load_widget(
    config: Path, log: Callable[..., None]
) -> tuple[Config, AdminBookmarks]:
    """Load config and wire the widget, exiting on config errors."""
    try:
        cfg = load_config(config)
    except FileNotFoundError:
        log(f"Error: Config file not found: {config}", color="red", err=True)
        raise typer.Exit(1) from None
    except (ValueError, yaml.YAMLError) as e:
        log(f"Error loading config: {e}", color="red", err=True)
        raise typer.Exit(1) from None
    return cfg, AdminBookmarks.from_config(cfg, config)


app = typer.Typer(
    help="Configure and render the admin bookmarks dropdown.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

ConfigOption = Annotated[
    Path,
    typer.Option("--config", "-c", help="Path to site config file"),
]
QuietOption = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Suppress output (exit code only)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show detailed progress"),
]


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Configure and render the admin bookmarks dropdown."""


@app.command()
def options(
    config: ConfigOption = Path("site.yml"),
    quiet: QuietOption = False,
) -> None:
    """Print the settings fields for choosing bookmarks as YAML."""
    log, _ = _make_logger(quiet)
    _, widget = _load_widget(config, log)

    try:
        fields = widget.options()
    except PageStoreUnavailable as exc:
        log(f"Error: {exc}", color="red", err=True)
        raise typer.Exit(1) from None

    data = {field.name: field.to_dict() for field in fields}
    typer.echo(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), nl=False)


@app.command()
def render(
    config: ConfigOption = Path("site.yml"),
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write markup here instead of stdout"),
    ] = None,
    fmt: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.html,
    quiet: QuietOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Render the bookmarks dropdown."""
    log, log_verbose = _make_logger(quiet, verbose)
    _, widget = _load_widget(config, log)

    result = widget.build()
    content = result.html
    if fmt is OutputFormat.markdown:
        content = dropdown_to_markdown(result.html)

    log_verbose(f"Bookmarks: {len(result.bookmarks)}")
    for bookmark in result.bookmarks:
        log_verbose(f"  - {bookmark.label} ({bookmark.url})")

    if result.warnings:
        log("Warnings:", color="yellow", err=True)
        for warning in result.warnings:
            log(f"- {warning}", color="yellow", err=True)

    if not result.bookmarks:
        log("No bookmarks to render.", color="yellow", err=True)

    if output is None:
        if content:
            typer.echo(content)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
    except OSError as exc:
        log(f"Error writing output file: {exc}", color="red", err=True)
        raise typer.Exit(1) from None
    log(f"Generated {output} ({len(content):,} bytes)")


@app.command()
def validate(
    config: ConfigOption = Path("site.yml"),
    quiet: QuietOption = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed config information"),
    ] = False,
) -> None:
    """Check config validity and report stale bookmarks."""
    log, log_verbose = _make_logger(quiet, verbose)

    try:
        cfg = load_config(config)
    except FileNotFoundError:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: File not found: {config}", color="red", err=True)
        raise typer.Exit(1) from None
    except (ValueError, yaml.YAMLError) as e:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: {e}", color="red", err=True)
        raise typer.Exit(1) from None

    widget = AdminBookmarks.from_config(cfg, config)
    try:
        index = widget.path_index()
    except PageStoreUnavailable as exc:
        log(f"Config invalid: {config}", color="red", err=True)
        log(f"  Error: {exc}", color="red", err=True)
        raise typer.Exit(1) from None

    bookmarks = widget.bookmarks()

    # Slug -> id of pages left out of the index, to explain stale slots
    skipped_ids = {page_id for page_id, _ in index.skipped}
    skipped_slugs = {
        page.slug.strip(): page.id
        for page in widget.page_store.list_live_pages()
        if page.id in skipped_ids
    }

    stale: list[tuple[int, str, str]] = []
    for slot in range(1, cfg.max_bookmarks + 1):
        stored = cfg.get_slot(slot).strip()
        if not stored or stored in index.entries:
            continue
        page_id = skipped_slugs.get(stored.rsplit("/", 1)[-1])
        if page_id is None:
            reason = "no live page with this path"
        else:
            reason = f"page {page_id} is in a parent cycle"
        stale.append((slot, stored, reason))

    log(f"Config valid: {config}")
    log(f"  Bookmarkable pages: {len(index.entries)}")
    log(f"  Bookmarks: {len(bookmarks)}/{cfg.max_bookmarks}")

    for path, label in index.entries.items():
        log_verbose(f"    - {path}: {label}")

    if index.skipped:
        log("Skipped pages:", color="yellow", err=True)
        for page_id, reason in index.skipped:
            log(f"- page {page_id} ({reason})", color="yellow", err=True)

    if stale:
        log("Stale bookmarks:", color="yellow", err=True)
        for slot, path, reason in stale:
            log(
                f"- {cfg.slot_key(slot)}: {path} ({reason})",
                color="yellow",
                err=True,
            )


@app.command()
def init(
    config: ConfigOption = Path("site.yml"),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing admin_bookmarks section"),
    ] = False,
    quiet: QuietOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Add admin_bookmarks plugin config to the site file."""
    log, log_verbose = _make_logger(quiet, verbose)

    if not config.exists():
        log(f"Error: Config file not found: {config}", color="red", err=True)
        raise typer.Exit(1)

    ryaml = _round_trip_yaml()
    with open(config, encoding="utf-8") as f:
        data = ryaml.load(f)
    if data is None:
        data = CommentedMap()
    if not isinstance(data, dict):
        log("Error: Config file must be a mapping.", color="red", err=True)
        raise typer.Exit(1)
    if not isinstance(data.get("plugins") or [], (list, dict)):
        log(
            "Error: 'plugins' must be a list or mapping in the site config.",
            color="red",
            err=True,
        )
        raise typer.Exit(1)

    if has_plugin(data.get("plugins")) and not force:
        log("Error: admin_bookmarks plugin already configured.", color="red", err=True)
        log("Use --force to reset it to the defaults.", color="yellow", err=True)
        raise typer.Exit(1)

    options_map = _plugin_options(data, create=True)
    for key in list(options_map):
        del options_map[key]
    options_map.fa.set_block_style()
    options_map["max_bookmarks"] = DEFAULT_MAX_BOOKMARKS
    options_map["label_separator"] = DoubleQuotedScalarString(
        DEFAULT_LABEL_SEPARATOR
    )
    options_map.yaml_add_eol_comment(
        "slots offered in the settings UI", "max_bookmarks"
    )
    options_map.yaml_add_eol_comment(
        "placed between ancestor titles", "label_separator"
    )

    with open(config, "w", encoding="utf-8") as f:
        ryaml.dump(data, f)

    log(f"Added admin_bookmarks plugin to {config}")
    log_verbose("Add bookmarks with 'admin-bookmarks set SLOT PATH'.")


def _round_trip_yaml() -> YAML:
    ryaml = YAML()
    ryaml.preserve_quotes = True
    return ryaml


def _plugin_options(data: Any, create: bool = False) -> Any:
    """Return the mutable plugin options mapping.

    A bare or option-less plugin entry is given an empty mapping. With
    ``create``, a missing entry is added in the style the plugins already use.
    """
    plugins = data.get("plugins")
    if plugins is None:
        if not create:
            return None
        plugins = data["plugins"] = CommentedSeq()

    if isinstance(plugins, dict):
        if PLUGIN_NAME not in plugins and not create:
            return None
        if not isinstance(plugins.get(PLUGIN_NAME), dict):
            plugins[PLUGIN_NAME] = CommentedMap()
        return plugins[PLUGIN_NAME]

    for position, plugin in enumerate(plugins):
        if plugin == PLUGIN_NAME:
            plugins[position] = CommentedMap({PLUGIN_NAME: CommentedMap()})
            return plugins[position][PLUGIN_NAME]
        if isinstance(plugin, dict) and PLUGIN_NAME in plugin:
            if not isinstance(plugin[PLUGIN_NAME], dict):
                plugin[PLUGIN_NAME] = CommentedMap()
            return plugin[PLUGIN_NAME]

    if not create:
        return None
    options_map = CommentedMap()
    plugins.append(CommentedMap({PLUGIN_NAME: options_map}))
    return options_map


@app.command("set")
def set_slot(
    slot: Annotated[int, typer.Argument(help="Bookmark slot number (1-based)")],
    path: Annotated[
        str, typer.Argument(help="Page path to bookmark; empty clears the slot")
    ] = "",
    config: ConfigOption = Path("site.yml"),
    quiet: QuietOption = False,
) -> None:
    """Store a page path in a bookmark slot."""
    log, _ = _make_logger(quiet)
    cfg, widget = _load_widget(config, log)

    if not 1 <= slot <= cfg.max_bookmarks:
        log(
            f"Error: Slot must be between 1 and {cfg.max_bookmarks}, got {slot}",
            color="red",
            err=True,
        )
        raise typer.Exit(1)

    path = path.strip()
    if path:
        try:
            index = widget.path_index()
        except PageStoreUnavailable as exc:
            log(f"Error: {exc}", color="red", err=True)
            raise typer.Exit(1) from None
        if path not in index.entries:
            log(f"Error: No live page with path: {path}", color="red", err=True)
            raise typer.Exit(1)

    ryaml = _round_trip_yaml()
    with open(config, encoding="utf-8") as f:
        data = ryaml.load(f)

    options_map = _plugin_options(data)
    if options_map is None:
        log("Error: admin_bookmarks plugin not configured.", color="red", err=True)
        log("Run 'admin-bookmarks init' first.", color="yellow", err=True)
        raise typer.Exit(1)

    key = cfg.slot_key(slot)
    if path:
        options_map[key] = path
    else:
        options_map.pop(key, None)

    with open(config, "w", encoding="utf-8") as f:
        ryaml.dump(data, f)

    if path:
        log(f"Bookmark {slot} set to {path}")
    else:
        log(f"Bookmark {slot} cleared")


if __name__ == "__main__":
    app()
