"""
Command-line interface for the Y.Doc inspector.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ydoc_inspector.config import CONFIG_SEARCH_PATHS, InspectorConfig
from ydoc_inspector.decoder import DecodeError, decode_with_stage
from ydoc_inspector.logging import disable, enable, setup_logging
from ydoc_inspector.tree import ExpansionState, TreeModel

console = Console()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Decode Y.Doc update files and browse them as JSON",
        prog="ydoc-inspect",
    )

    # Global options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Config file (default: search the standard locations)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # View command
    view_parser = subparsers.add_parser("view", help="Open the interactive viewer")
    view_parser.add_argument("files", nargs="*", help="Update files to open")

    # Decode command
    decode_parser = subparsers.add_parser("decode", help="Decode files and print JSON")
    decode_parser.add_argument("files", nargs="+", help="Update files to decode")
    decode_parser.add_argument(
        "--json",
        action="store_true",
        help="Print plain JSON (no highlighting)",
    )
    decode_parser.add_argument(
        "--stage",
        action="store_true",
        help="Show which extraction stage produced each value",
    )

    # Tree command
    tree_parser = subparsers.add_parser("tree", help="Print the collapsible tree as text")
    tree_parser.add_argument("file", help="Update file to render")
    tree_parser.add_argument(
        "--collapse",
        action="append",
        dest="collapse",
        metavar="PATH",
        help="Collapse the node at PATH (e.g. items/0); repeatable",
    )
    tree_parser.add_argument(
        "--collapse-all",
        action="store_true",
        help="Start with every node collapsed",
    )

    # Config command with subcommands
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="config_command", help="Config commands")

    # config show
    config_subparsers.add_parser("show", help="Show current configuration")

    # config init
    config_init_parser = config_subparsers.add_parser("init", help="Initialize a new config file")
    config_init_parser.add_argument(
        "-o",
        "--output",
        default="ydoc-inspector.yaml",
        help="Output file path",
    )

    # config path
    config_subparsers.add_parser("path", help="Show config file paths")

    args = parser.parse_args(argv)

    load_dotenv()
    config = _load_config(args.config)

    # Setup logging based on verbosity
    if getattr(args, "verbose", False):
        config.log_level = "DEBUG"
    setup_logging(config.log_level)

    if args.command == "view":
        cmd_view(args, config)
    elif args.command == "decode":
        cmd_decode(args, config)
    elif args.command == "tree":
        cmd_tree(args, config)
    elif args.command == "config":
        cmd_config(args, config)
    else:
        parser.print_help()


def _load_config(path: Path | None) -> InspectorConfig:
    """Load config, exiting with a message when the file is unusable."""
    if path is not None and not path.is_file():
        console.print(f"[red]Config file not found: {path}[/red]")
        sys.exit(1)
    try:
        return InspectorConfig.load(path)
    except (yaml.YAMLError, OSError, TypeError, ValueError, AttributeError) as e:
        console.print(f"[red]Invalid config: {escape(str(e))}[/red]")
        sys.exit(1)


def _print_read_error(path: Path, error: OSError) -> None:
    reason = error.strerror or str(error)
    console.print(f"[red]Failed to read file {escape(path.name)}: {escape(reason)}[/red]")


def cmd_view(args: argparse.Namespace, config: InspectorConfig) -> None:
    """Open the interactive viewer."""
    from ydoc_inspector.app import InspectorApp

    # The viewer owns the terminal, so logs go to a file or nowhere.
    if config.log_file:
        setup_logging(config.log_level, file=str(config.log_file))
    else:
        disable()

    app = InspectorApp(config)
    try:
        app.run(args.files)
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    finally:
        enable()


def cmd_decode(args: argparse.Namespace, config: InspectorConfig) -> None:
    """Decode each file and print its value."""
    failures = 0

    for name in args.files:
        path = Path(name)
        try:
            raw = path.read_bytes()
            result = decode_with_stage(raw, path.name, config=config)
        except OSError as e:
            _print_read_error(path, e)
            failures += 1
            continue
        except DecodeError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            failures += 1
            continue

        if len(args.files) > 1 or args.stage:
            header = f"[bold]{escape(result.source_name)}[/bold]"
            if args.stage:
                header += f" [dim]({result.stage.value})[/dim]"
            console.print(header)

        text = json.dumps(result.value, indent=2, ensure_ascii=False)
        if args.json:
            print(text)
        else:
            console.print_json(text)

    if failures:
        sys.exit(1)


def cmd_tree(args: argparse.Namespace, config: InspectorConfig) -> None:
    """Print the rendered tree for one file."""
    path = Path(args.file)
    try:
        raw = path.read_bytes()
        result = decode_with_stage(raw, path.name, config=config)
    except OSError as e:
        _print_read_error(path, e)
        sys.exit(1)
    except DecodeError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    default = config.default_expanded and not args.collapse_all
    model = TreeModel(
        result.value,
        ExpansionState(default=default),
        elision_marker=config.elision_marker,
    )
    for path_text in args.collapse or []:
        try:
            model.state.set_expanded(model.resolve_path(path_text), False)
        except KeyError:
            console.print(f"[red]No such path: {escape(path_text)}[/red]")
            sys.exit(1)

    print(
        model.plain_text(
            config.indent_width,
            expanded_glyph=config.expanded_glyph,
            collapsed_glyph=config.collapsed_glyph,
        )
    )


def cmd_config(args: argparse.Namespace, config: InspectorConfig) -> None:
    """Configuration management commands."""
    if args.config_command == "show":
        _config_show(config, args.config)
    elif args.config_command == "init":
        _config_init(args.output)
    elif args.config_command == "path":
        _config_path()
    else:
        console.print("[yellow]Usage: ydoc-inspect config <show|init|path>[/yellow]")


def _config_show(config: InspectorConfig, explicit: Path | None = None) -> None:
    """Show current configuration."""
    candidates = [explicit] if explicit is not None else CONFIG_SEARCH_PATHS
    loaded_from = next((p for p in candidates if p.is_file()), None)

    if loaded_from is None:
        console.print("[dim]No config file found. Using defaults.[/dim]")
    else:
        console.print(f"[dim]Loaded from: {loaded_from}[/dim]\n")

    console.print("[bold]Current Configuration:[/bold]\n")
    console.print(yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False))


def _config_init(output: str) -> None:
    """Initialize a new config file."""
    output_path = Path(output)

    if output_path.exists():
        console.print(f"[red]File already exists: {output_path}[/red]")
        sys.exit(1)

    default_config = InspectorConfig().to_dict()

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(default_config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    console.print(f"[green]Created config file: {output_path}[/green]")


def _config_path() -> None:
    """Show config file search paths."""
    table = Table(title="Config file search paths")
    table.add_column("Location")
    table.add_column("Path", style="cyan")
    table.add_column("Exists", justify="center")

    labels = ["Current directory", "User config"]
    for label, path in zip(labels, CONFIG_SEARCH_PATHS):
        exists = "[green]✓[/green]" if path.exists() else "[dim]·[/dim]"
        table.add_row(label, str(path), exists)

    console.print(table)


if __name__ == "__main__":
    main()
