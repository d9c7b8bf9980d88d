"""Typer CLI application for browsing and editing theme colors."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.table import Table
from rich.text import Text

from omarchy_theme_maker.codec.scanner import detect_colors_in_content
from omarchy_theme_maker.config.settings import color_to_hex
from omarchy_theme_maker.core.color import Rgba
from omarchy_theme_maker.edit.session import SortMode, ThemeSession
from omarchy_theme_maker.errors import ThemeMakerError
from omarchy_theme_maker.render.terminal import (
    ColorTextRenderer,
    render_color_table,
    to_rich_color,
)


class SortChoice(str, Enum):
    name = "name"
    color = "color"
    last = "last"


SORT_MODES = {
    SortChoice.name: SortMode.NAME,
    SortChoice.color: SortMode.COLOR,
    SortChoice.last: SortMode.LAST_OPENED,
}


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def parse_color_argument(text: str) -> Rgba | None:
    """Resolve a color given on the command line (any literal the scanner accepts)."""
    text = text.strip()
    for color in detect_colors_in_content(text):
        if color.start_col == 0 and color.end_col == len(text):
            return color.value
    return None


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="omarchy-theme-maker",
        help="Browse Omarchy themes and edit the colors in their config files.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()
    options: dict[str, Optional[str]] = {"themes_path": None}

    def fail(message: str | None) -> None:
        console.print(f"[red]{message or 'Unknown error'}[/]")
        raise typer.Exit(1)

    def open_session() -> ThemeSession:
        session = ThemeSession.from_config()
        if options["themes_path"]:
            session.themes_path = options["themes_path"]
        session.load_themes()
        if not session.theme_names:
            fail(session.error_message)
        return session

    def open_theme(theme: str) -> ThemeSession:
        session = open_session()
        if not session.select_theme(theme):
            fail(session.error_message)
        return session

    def open_file(theme: str, file: str) -> ThemeSession:
        session = open_theme(theme)
        if not session.select_file(file):
            fail(session.error_message)
        if session.error_message:
            fail(session.error_message)
        return session

    @app.callback()
    def main_options(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
        themes_path: Annotated[Optional[str], typer.Option("--themes-path", "-p", help="Override the themes directory")] = None,
    ) -> None:
        setup_logging(verbose)
        options["themes_path"] = themes_path

    @app.command()
    def themes(
        sort: Annotated[SortChoice, typer.Option("--sort", "-s", help="Sort order")] = SortChoice.name,
    ) -> None:
        """List theme directories."""
        session = open_session()
        session.sort_themes(SORT_MODES[sort])
        console.print(f"[bold]Themes in {session.themes_root}[/]")
        for name in session.theme_names:
            console.print(f"  {name}")

    @app.command()
    def files(
        theme: Annotated[str, typer.Argument(help="Theme directory name")],
        sort: Annotated[SortChoice, typer.Option("--sort", "-s", help="Sort order")] = SortChoice.name,
    ) -> None:
        """List the config files of a theme."""
        session = open_theme(theme)
        if not session.theme_files:
            fail(session.error_message)
        session.sort_files(SORT_MODES[sort])
        console.print(f"[bold]Files in {theme}[/]")
        for name in session.theme_files:
            label = Text(f"  {name}")
            if sort == SortChoice.color:
                label.stylize(Style(color=to_rich_color(session.extension_color(name))))
            console.print(label)

    @app.command()
    def colors(
        theme: Annotated[str, typer.Argument(help="Theme directory name")],
        file: Annotated[str, typer.Argument(help="File inside the theme")],
        table: Annotated[bool, typer.Option("--table", "-t", help="Show a table instead of the file")] = False,
    ) -> None:
        """Show the color literals found in a theme file."""
        session = open_file(theme, file)
        console.print(f"[dim]{session.file_path}[/]")
        if not session.detected_colors:
            console.print("[yellow]No colors found[/]")
            return
        if table:
            console.print(render_color_table(session.detected_colors, title=file))
        else:
            console.print(ColorTextRenderer().render(session.file_content, session.detected_colors))

    @app.command(name="set")
    def set_color(
        theme: Annotated[str, typer.Argument(help="Theme directory name")],
        file: Annotated[str, typer.Argument(help="File inside the theme")],
        color_id: Annotated[str, typer.Argument(help="Color id as shown by 'colors --table'")],
        new_color: Annotated[str, typer.Argument(help="New color, e.g. '#ff0000' or 'rgb(255, 0, 0)'")],
        save_as: Annotated[bool, typer.Option("--save-as", help="Save as a new theme using the save prefix")] = False,
        overwrite: Annotated[bool, typer.Option("--overwrite", help="Write every file of the theme back")] = False,
        dry_run: Annotated[bool, typer.Option("--dry-run", "-n", help="Show the result without saving")] = False,
    ) -> None:
        """Change one color literal, keeping the way it is written."""
        value = parse_color_argument(new_color)
        if value is None:
            fail(f"Not a color literal: {new_color}")

        session = open_file(theme, file)
        target = session.start_color_edit_by_id(color_id)
        if target is None:
            fail(session.error_message)

        new_text = session.update_color(value)
        if new_text is None:
            fail(session.error_message)
        console.print(f"{target.hex_text} → {new_text} ({target.original_format.name})")

        if dry_run:
            console.print(ColorTextRenderer().render(
                session.file_content, session.detected_colors, session.modified_colors,
            ))
            return

        try:
            if save_as:
                path = session.save_as_new()
            elif overwrite:
                path = session.overwrite_theme()
            else:
                path = session.save_file()
        except ThemeMakerError as exc:
            fail(str(exc))
        console.print(f"[green]Saved {path}[/]")

    @app.command()
    def config(
        themes_path: Annotated[Optional[str], typer.Option("--set-themes-path", help="New themes directory")] = None,
        save_prefix: Annotated[Optional[str], typer.Option("--save-prefix", help="Prefix for themes saved as new")] = None,
        enable: Annotated[Optional[list[str]], typer.Option("--enable", help="Scan files with this extension")] = None,
        disable: Annotated[Optional[list[str]], typer.Option("--disable", help="Stop scanning this extension")] = None,
    ) -> None:
        """Show or change settings."""
        session = ThemeSession.from_config()
        changed = themes_path is not None or save_prefix is not None or bool(enable) or bool(disable)

        if changed:
            session.enter_settings()
            if themes_path is not None:
                session.themes_path = themes_path
            if save_prefix is not None:
                session.save_prefix = save_prefix
            for ext, enabled in [(e, True) for e in enable or []] + [(e, False) for e in disable or []]:
                ext = ext if ext.startswith('.') else f".{ext}"
                entry = session.enabled_extensions.get(ext)
                if entry is None:
                    fail(f"Unknown extension: {ext}")
                entry.enabled = enabled
            if not session.settings_ok():
                fail(session.error_message)

        console.print(f"[dim]Config loaded from: {session.config_source or 'defaults'}[/]")
        console.print(f"[bold]Themes directory:[/] {session.themes_path}")
        console.print(f"[bold]Save prefix:[/]      {session.save_prefix}")
        table = Table(title="Extensions")
        table.add_column("Extension")
        table.add_column("Enabled")
        table.add_column("Color")
        for ext in sorted(session.enabled_extensions):
            entry = session.enabled_extensions[ext]
            table.add_row(
                ext,
                "yes" if entry.enabled else "no",
                Text(color_to_hex(entry.color), style=Style(color=to_rich_color(entry.color))),
            )
        console.print(table)

    return app
