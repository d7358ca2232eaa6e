"""The alias registry.

A registry is a root directory holding an ``available`` directory of
symbolic links, one per alias, and an optional ``current`` link pointing at
the resolved target of whichever alias was selected last.

No locking is done. Registry commands are expected to run as short-lived,
sequential invocations by a single local user.
"""

import logging
import os
import re
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Generator

from src.errors import AliasNotFoundError, InvalidAliasError, InvalidTargetError, UnknownIOError

logger = logging.getLogger("ss")

AVAILABLE_DIR = "available"
CURRENT_LINK = "current"


@dataclass
class AliasEntry:
    """An alias and the real path it resolves to.

    ``target`` is None when the link is dangling.
    """

    name: str
    target: str | None

    @property
    def resolvable(self) -> bool:
        return self.target is not None


@dataclass
class Listing:
    """A snapshot of the registry, as reported by ``AliasRegistry.list``."""

    current: str | None
    aliases: list[AliasEntry] = field(default_factory=list)


@contextmanager
def _unexpected_io(action: str, alias: str | None = None, path: str | None = None) -> Generator[None, None, None]:
    """Re-raise unexpected filesystem failures as UnknownIOError."""
    try:
        yield
    except OSError as e:
        logger.error("Failed to %s: %s", action, e)
        raise UnknownIOError(f"failed to {action}: {e}", alias=alias, path=path) from e


def normalise_alias(name: str) -> str:
    """Replace whitespace with underscores and validate the result.

    Args:
        name (str): the raw alias name

    Returns:
        str: the normalised alias name

    Raises:
        InvalidAliasError: if the name is empty, reserved, or contains a path separator
    """
    normalised = re.sub(r"\s", "_", name)

    separators = {"/", os.sep}
    if os.altsep:
        separators.add(os.altsep)

    if any(sep in normalised for sep in separators):
        raise InvalidAliasError(f'Alias "{normalised}" must not contain a path separator', alias=normalised)
    if normalised in ("", ".", ".."):
        raise InvalidAliasError(f'"{normalised}" is not a valid alias', alias=normalised)

    return normalised


def _resolve_link(link: str) -> str | None:
    """Return the real path behind a link, or None if it is dangling."""
    if not os.path.exists(link):
        return None
    return os.path.realpath(link)


class AliasRegistry:
    """Named directory aliases, stored as symbolic links under a root directory."""

    def __init__(self, root: str) -> None:
        self.root = os.path.abspath(os.path.expanduser(root))
        self.available_dir = os.path.join(self.root, AVAILABLE_DIR)
        self.current_link = os.path.join(self.root, CURRENT_LINK)

    def init(self) -> None:
        """Create the registry root and the available directory if missing."""
        with _unexpected_io("create registry", path=self.root):
            os.makedirs(self.available_dir, exist_ok=True)

    def _alias_link(self, name: str) -> str:
        return os.path.join(self.available_dir, name)

    def _existing_link(self, name: str) -> tuple[str, str]:
        """Find the link of an existing alias.

        Returns:
            tuple[str, str]: the normalised alias name and its link path

        Raises:
            AliasNotFoundError: if no alias of that name exists
        """
        try:
            name = normalise_alias(name)
        except InvalidAliasError as e:
            # a malformed name can never have been added
            raise AliasNotFoundError(f'Alias "{name}" not found', alias=name) from e

        link = self._alias_link(name)
        if not os.path.lexists(link):
            raise AliasNotFoundError(f'Alias "{name}" not found', alias=name)
        return name, link

    def aliases(self) -> list[str]:
        """Return the names of every alias, sorted."""
        with _unexpected_io("read aliases", path=self.available_dir):
            return sorted(os.listdir(self.available_dir))

    def add(self, name_or_path: str, path: str | None = None) -> AliasEntry:
        """Add an alias, overwriting any existing alias of the same name.

        With a single argument, it is taken as the path and the alias name
        is the last component of that path.

        Args:
            name_or_path (str): the alias name, or the path if ``path`` is omitted
            path (str | None): the target directory

        Returns:
            AliasEntry: the alias and the absolute path it now points at
        """
        if path is None:
            name = None
            path = name_or_path
        else:
            name = name_or_path

        target = os.path.abspath(os.path.expanduser(path))
        if not os.path.isdir(target):
            raise InvalidTargetError(f'Target folder "{target}" does not exist, or is not a directory', path=target)

        if name is None:
            name = os.path.basename(target)
        name = normalise_alias(name)

        link = self._alias_link(name)
        with _unexpected_io("create symlink", alias=name, path=target):
            if os.path.lexists(link):
                logger.info("Overwriting alias %s", name)
                os.unlink(link)
            os.symlink(target, link, target_is_directory=True)

        logger.info("Added alias %s -> %s", name, target)
        return AliasEntry(name, target)

    def resolve(self, name: str) -> str:
        """Resolve an alias to the real path of its target.

        Raises:
            AliasNotFoundError: if the alias is missing or dangling
        """
        name, link = self._existing_link(name)

        with _unexpected_io("resolve alias", alias=name):
            target = _resolve_link(link)
        if target is None:
            raise AliasNotFoundError(f'Alias "{name}" points at a folder that no longer exists', alias=name)
        return target

    def current(self) -> str | None:
        """Return the real path of the current target, or None if unset or dangling."""
        with _unexpected_io("resolve current target", path=self.current_link):
            return _resolve_link(self.current_link)

    def use(self, name: str) -> str:
        """Make an alias the current target.

        Args:
            name (str): the alias to use

        Returns:
            str: the newly active, resolved path
        """
        target = self.resolve(name)

        with _unexpected_io("set current target", alias=name, path=target):
            if os.path.lexists(self.current_link):
                os.unlink(self.current_link)
            os.symlink(target, self.current_link, target_is_directory=True)

        logger.info("Current target set to %s (%s)", target, name)
        return target

    def remove(self, name: str) -> str:
        """Remove a single alias, dangling or not.

        Returns:
            str: the normalised name of the removed alias
        """
        name, link = self._existing_link(name)

        with _unexpected_io("remove alias", alias=name):
            os.unlink(link)
        logger.info("Removed alias %s", name)
        return name

    def remove_all(self) -> list[str]:
        """Remove every alias.

        Returns:
            list[str]: names of the removed aliases
        """
        names = self.aliases()
        for name in names:
            with _unexpected_io("remove alias", alias=name):
                os.unlink(self._alias_link(name))
        logger.info("Removed all %i aliases", len(names))
        return names

    def prune(self) -> list[str]:
        """Remove only the aliases whose targets cannot be resolved.

        Returns:
            list[str]: names of the removed aliases, empty if nothing was pruned
        """
        dangling = [entry.name for entry in self.list().aliases if not entry.resolvable]
        for name in dangling:
            with _unexpected_io("remove alias", alias=name):
                os.unlink(self._alias_link(name))

        if dangling:
            logger.info("Pruned aliases: %s", ", ".join(dangling))
        else:
            logger.info("Nothing to prune")
        return dangling

    # Kept last: the method name shadows the builtin for annotations evaluated after it
    def list(self) -> Listing:
        """Report the current target and every alias, dangling ones included."""
        entries = []
        for name in self.aliases():
            with _unexpected_io("resolve alias", alias=name):
                entries.append(AliasEntry(name, _resolve_link(self._alias_link(name))))
        return Listing(current=self.current(), aliases=entries)
