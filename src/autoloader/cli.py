"""Command-line interface for autoloader."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .config_store import CONFIG_ENV_VAR, ConfigStore
from .errors import AutoloaderError
from .loader import IncludeOnceLoader
from .models import AutoloaderConfig, ConfigBuilder, Resolution, ResolveOutcome
from .resolver import Resolver


def get_store(args: argparse.Namespace) -> ConfigStore:
    """Get the ConfigStore selected by --config (or the default location)."""
    return ConfigStore(Path(args.config) if args.config else None)


def get_resolver(args: argparse.Namespace, loader: IncludeOnceLoader | None = None) -> Resolver:
    """Build a Resolver from the stored configuration."""
    config = get_store(args).load()
    return Resolver(config, loader)


def format_resolution(result: Resolution) -> str:
    """Format a resolution for display."""
    lines = [f"{result.symbol_name}: {result.outcome.value}"]
    if result.candidates:
        lines.append("  Candidates:")
        lines.extend(f"    {c}" for c in result.candidates)
    if result.entry:
        readable = "" if result.entry.is_readable else " (unreadable)"
        lines.append(f"  Match: {result.entry.path}{readable}")
    return "\n".join(lines)


def cmd_init(args: argparse.Namespace) -> int:
    """Write a new configuration file."""
    try:
        store = get_store(args)

        builder = ConfigBuilder().set_root_directory(args.root)
        if args.ext is not None:
            builder.set_file_extension(args.ext)
        if args.prefix:
            builder.set_file_prefixes(args.prefix)
        if args.snake_case:
            builder.enable_snake_case(use_dashes=args.dashes)
        elif args.dashes:
            builder.enable_dash_for_underscore()
        if args.namespaces:
            builder.enable_namespaces(strip_root=args.strip_root)
        if args.separator is not None:
            builder.set_namespace_separator(args.separator)

        store.init(builder.build(), force=args.force)

        print(f"Initialized autoloader config at {store.config_path}")
        return 0

    except AutoloaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Show the stored configuration."""
    try:
        config = get_store(args).load()

        if args.json:
            print(json.dumps(config.to_dict(), indent=2))
            return 0

        prefixes = ", ".join(repr(p) for p in config.file_prefixes) or "(none)"
        print(f"Root directory:     {config.root_directory}")
        print(f"File extension:     {config.file_extension}")
        print(f"File prefixes:      {prefixes}")
        print(f"Snake case:         {'yes' if config.uses_snake_case else 'no'}")
        print(f"Underscore to dash: {'yes' if config.underscore_to_dash else 'no'}")
        if config.uses_namespaces:
            strip = " (root stripped)" if config.strip_root_namespace else ""
            print(f"Namespaces:         yes, separator {config.namespace_separator!r}{strip}")
        else:
            print("Namespaces:         no")
        return 0

    except AutoloaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_candidates(args: argparse.Namespace) -> int:
    """Print the candidate paths for a symbol."""
    try:
        resolver = get_resolver(args)
        candidates = resolver.candidates(args.symbol)

        if args.json:
            print(json.dumps({"symbol_name": args.symbol, "candidates": list(candidates)}, indent=2))
        elif not candidates:
            print(f"No candidates for {args.symbol}.")
        else:
            for candidate in candidates:
                print(candidate)
        return 0

    except AutoloaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_locate(args: argparse.Namespace) -> int:
    """Find the file a symbol resolves to, without loading it."""
    try:
        result = get_resolver(args).locate(args.symbol)

        if args.json:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            print(format_resolution(result))

        return 0 if result.outcome is ResolveOutcome.FOUND else 1

    except AutoloaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_listing(args: argparse.Namespace) -> int:
    """Print the files visible to the resolver, in match-priority order."""
    try:
        resolver = get_resolver(args)
        listing = resolver.listing()

        if args.json:
            data = [entry.to_dict() for entry in listing]
            print(json.dumps(data, indent=2))
            return 0

        if not listing:
            print(f"No files found under {listing.root}.")
            return 0

        print(f"Files under {listing.root} ({len(listing)}):")
        namespaced = resolver.config.uses_namespaces
        for entry in listing:
            readable = "" if entry.is_readable else "  (unreadable)"
            print(f"  {entry.comparison_key(namespaced)}{readable}")
        return 0

    except AutoloaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_load(args: argparse.Namespace) -> int:
    """Resolve a symbol and execute the matched file."""
    try:
        loader = IncludeOnceLoader()
        resolver = get_resolver(args, loader)
        try:
            result = resolver.resolve_detailed(args.symbol)
        except Exception as e:
            # only the matched file's own code can raise here
            path = resolver.locate(args.symbol).entry.path
            print(f"Error: {path} raised {type(e).__name__}: {e}", file=sys.stderr)
            return 1

        print(format_resolution(result))
        if result.outcome is not ResolveOutcome.LOADED:
            return 1

        names = loader.names_from(result.entry.path)
        print(f"  Defined: {', '.join(names) if names else '(nothing)'}")
        return 0

    except AutoloaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the API server."""
    try:
        import uvicorn

        store = get_store(args)
        # The API reads its config location from the environment
        os.environ[CONFIG_ENV_VAR] = str(store.config_path.resolve())

        if not store.exists():
            print("Warning: autoloader not initialized. Run 'autoloader init' first.", file=sys.stderr)
            print("Starting server anyway...", file=sys.stderr)

        print("Starting autoloader API server...")
        print(f"Config: {store.config_path}")
        print(f"API docs: http://{args.host}:{args.port}/docs")
        print()

        # When reload is enabled, uvicorn requires the app as an import string
        app_target = "autoloader.api:app" if args.reload else None
        if app_target is None:
            from .api import app
            app_target = app

        uvicorn.run(
            app_target,
            host=args.host,
            port=args.port,
            reload=args.reload,
        )
        return 0

    except AutoloaderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="autoloader",
        description="Resolve symbol names to source files by naming convention",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c", help=f"Config file (default: ${CONFIG_ENV_VAR} or ./autoload.json)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # init
    defaults = AutoloaderConfig()
    init_parser = subparsers.add_parser("init", help="Write a config file")
    init_parser.add_argument(
        "--root", "-r", default=".",
        help="Root directory to search, relative to the config file (default: .)",
    )
    init_parser.add_argument(
        "--ext", "-e", help=f"File extension incl. leading dot (default: {defaults.file_extension})"
    )
    init_parser.add_argument(
        "--prefix", "-p", action="append",
        help="Filename prefix, repeat for several (tried in order)",
    )
    init_parser.add_argument(
        "--snake-case", action="store_true", help="Convert CamelCase names to snake_case"
    )
    init_parser.add_argument(
        "--dashes", action="store_true", help="Replace underscores with dashes"
    )
    init_parser.add_argument(
        "--namespaces", action="store_true", help="Require namespaced symbol names"
    )
    init_parser.add_argument(
        "--strip-root", action="store_true", help="Ignore the top namespace (with --namespaces)"
    )
    init_parser.add_argument(
        "--separator", help=f"Namespace separator (default: {defaults.namespace_separator!r})"
    )
    init_parser.add_argument(
        "--force", "-f", action="store_true", help="Overwrite existing config"
    )

    # show
    show_parser = subparsers.add_parser("show", help="Show the configuration")
    show_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # candidates
    candidates_parser = subparsers.add_parser(
        "candidates", help="Print candidate paths for a symbol"
    )
    candidates_parser.add_argument("symbol", help="Symbol name (e.g. 'Ns\\Sub\\Bar')")
    candidates_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # locate
    locate_parser = subparsers.add_parser(
        "locate", help="Find the file for a symbol without loading it"
    )
    locate_parser.add_argument("symbol", help="Symbol name")
    locate_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # listing
    listing_parser = subparsers.add_parser(
        "listing", help="List files under the root directory in match order"
    )
    listing_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # load
    load_parser = subparsers.add_parser(
        "load", help="Resolve a symbol and execute the matched file"
    )
    load_parser.add_argument("symbol", help="Symbol name")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--port", type=int, default=8000, help="Port to bind to (default: 8000)"
    )
    serve_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    return parser


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "init": cmd_init,
        "show": cmd_show,
        "candidates": cmd_candidates,
        "locate": cmd_locate,
        "listing": cmd_listing,
        "load": cmd_load,
        "serve": cmd_serve,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
