#!/usr/bin/env python3
"""
roamdeps CLI

Add an org-roam note and every note it references (transitively) to a
git repository, or print the files that would be added.
"""

import argparse
import logging
import sys
from pathlib import Path

from errors import RoamDepsError
from exporters import to_json, to_list, to_tree
from graph.closure import transitive_closure
from graph.identity import RoamFile
from roam.discovery import resolve_db_path
from roam.store import open_store
from settings import FORMATS, load_settings, setup_logging
from vcs.git import changed_only, find_git_repo, is_modified, stage

logger = logging.getLogger("roamdeps")


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="roamdeps",
        description="Add an org-roam note and all its dependencies to the git repository.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  roamdeps notes/project.org                  # Print modified files reachable from a note
  roamdeps notes/project.org --show-all       # Print every reachable file
  roamdeps notes/project.org --add            # Stage every reachable file
  roamdeps a.org b.org --exclude-unchanged    # Stop walking at unchanged notes
  roamdeps a.org -f tree --show-all           # Show how each file was reached
  roamdeps a.org --roam-db ~/org-roam.db      # Use a specific database
        """,
    )

    # Positional arguments
    parser.add_argument(
        "files",
        nargs="+",
        help="Files to start from",
    )

    # Mode options
    parser.add_argument(
        "--add",
        action="store_true",
        help="Add files to git index instead of printing them",
    )

    parser.add_argument(
        "--exclude-unchanged",
        action="store_true",
        default=None,
        help="Do not follow references out of files that are unchanged in git",
    )

    parser.add_argument(
        "--show-all",
        action="store_true",
        default=None,
        help="Show all files, not just modified ones",
    )

    parser.add_argument(
        "--roam-db",
        type=str,
        default=None,
        help="Path to org-roam database (default: ~/.emacs.d/.local/cache/org-roam.db)",
    )

    # Output options
    parser.add_argument(
        "-f", "--format",
        choices=FORMATS,
        default=None,
        help="Output format when printing (default: list)",
    )

    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="Tree output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    # Ambient options
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Config file (default: ~/.config/roamdeps/config.yaml if present)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=None,
        help="Logging level (default: WARNING)",
    )

    return parser.parse_args(args)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    try:
        settings = load_settings(
            config_path=Path(parsed.config) if parsed.config else None,
            cli_overrides={
                "roam_db": parsed.roam_db,
                "exclude_unchanged": parsed.exclude_unchanged,
                "show_all": parsed.show_all,
                "format": parsed.format,
                "log_level": parsed.log_level,
            },
        )
    except RoamDepsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(settings.log_level)

    try:
        return run(parsed, settings)
    except RoamDepsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def run(parsed, settings):
    """Compute the closure, then stage or print it."""
    seeds = [RoamFile.normalize(raw) for raw in parsed.files]

    repo = find_git_repo()

    db_path = resolve_db_path(settings.roam_db)
    logger.info("Using org-roam database at %s", db_path)

    exclude = changed_only(repo) if settings.exclude_unchanged else None

    with open_store(db_path) as store:
        result = transitive_closure(store, seeds, exclude)
    logger.info("Found %r", result)

    if parsed.add:
        stage(repo, result.files())
        return 0

    # Printing filters strictly: a status failure aborts the run.
    keep = None if settings.show_all else (lambda path: is_modified(repo, path))

    if settings.format == "json":
        output = to_json(result, keep=keep)
    elif settings.format == "tree":
        output = to_tree(
            result,
            base=Path(repo.working_tree_dir),
            style=parsed.ascii_style,
            keep=keep,
        )
    else:  # list (default)
        output = to_list(result, keep=keep)

    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n" if output else "", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    elif output:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
