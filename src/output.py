"""Functions to output command results to stdout and stderr."""

import sys
from logging import getLogger

from src.registry import AliasEntry, Listing

logging = getLogger("ss")

UNRESOLVABLE = "(unresolvable)"
NONE_SET = "(none set)"


def print_error(message: str) -> None:
    """Print an error message to stderr and write it to the log."""
    print(f"ERROR: {message}", file=sys.stderr)
    logging.error(message)


def format_alias(entry: AliasEntry, width: int = 0) -> str:
    """Format an alias as ``name -> target``.

    Args:
        entry (AliasEntry): the alias
        width (int): the width to pad the name to

    Returns:
        str: the formatted line
    """
    target = entry.target if entry.resolvable else UNRESOLVABLE
    return f"{entry.name.ljust(width)} -> {target}"


def format_listing(listing: Listing) -> str:
    """Format the output of ``ls``."""
    lines = ["Current target:", listing.current or NONE_SET, "", "Aliases:"]

    if not listing.aliases:
        lines.append("(none)")
    else:
        width = max(len(entry.name) for entry in listing.aliases)
        lines.extend(format_alias(entry, width) for entry in listing.aliases)

    return "\n".join(lines)


def format_removed(names: list[str]) -> str:
    """Format the names removed by ``remove``."""
    if not names:
        return "nothing to remove"
    return "\n".join(f"removed {name}" for name in names)
