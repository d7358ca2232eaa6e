"""ss: serve a named folder as static files.

This is the main entry point script for ss. Folders are registered under an
alias with "add", one is selected with "use", and "serve" serves it over HTTP.
"""

import argparse
import logging
import sys

from config import Config
from src.errors import SsError
from src.output import format_alias, format_listing, format_removed, print_error
from src.registry import AliasRegistry
from src.server import serve

logger = logging.getLogger('ss')


def cmd_add(registry: AliasRegistry, config: Config, args: argparse.Namespace) -> int:
  """Add an alias."""
  entry = registry.add(args.alias_or_path, args.path)
  print(format_alias(entry))
  return 0


def cmd_ls(registry: AliasRegistry, config: Config, args: argparse.Namespace) -> int:
  """List the current target and every alias."""
  print(format_listing(registry.list()))
  return 0


def cmd_use(registry: AliasRegistry, config: Config, args: argparse.Namespace) -> int:
  """Select the alias to serve."""
  target = registry.use(args.alias)
  print(f'Current target: {target}')
  return 0


def cmd_remove(registry: AliasRegistry, config: Config, args: argparse.Namespace) -> int:
  """Remove one alias, every alias, or only the dangling ones."""
  if args.prune:
    names = registry.prune()
    print(format_removed(names) if names else 'nothing to prune')
  elif args.all:
    print(format_removed(registry.remove_all()))
  else:
    print(format_removed([registry.remove(args.alias)]))
  return 0


def cmd_serve(registry: AliasRegistry, config: Config, args: argparse.Namespace) -> int:
  """Serve the current target until interrupted."""
  serve(registry, config.host, config.port)
  return 0


def build_parser() -> argparse.ArgumentParser:
  """Build the command line parser."""
  parser = argparse.ArgumentParser(
    prog='ss',
    description='Serve a named folder as static files over HTTP.',
  )
  parser.add_argument(
    '--root',
    help='registry directory (default: $SS_HOME, or ~/.ss)',
  )

  subparsers = parser.add_subparsers(dest='command', metavar='<command>')

  add_parser = subparsers.add_parser(
    'add',
    help='add a target folder',
    description='Add a target folder. If only <path> is given, its last path component is used as the alias.',
  )
  add_parser.add_argument('alias_or_path', metavar='<alias|path>')
  add_parser.add_argument('path', nargs='?', metavar='[path]')
  add_parser.set_defaults(handler=cmd_add)

  ls_parser = subparsers.add_parser('ls', help='list added target folders')
  ls_parser.set_defaults(handler=cmd_ls)

  use_parser = subparsers.add_parser('use', help='set <alias> as the "current" folder for static serving')
  use_parser.add_argument('alias', metavar='<alias>')
  use_parser.set_defaults(handler=cmd_use)

  remove_parser = subparsers.add_parser('remove', help='remove an alias, every alias, or dangling aliases')
  remove_parser.add_argument('alias', nargs='?', metavar='[alias]')
  modes = remove_parser.add_mutually_exclusive_group()
  modes.add_argument('--all', action='store_true', help='remove every alias')
  modes.add_argument('--prune', action='store_true', help='remove aliases whose folder no longer exists')
  remove_parser.set_defaults(handler=cmd_remove)

  serve_parser = subparsers.add_parser('serve', aliases=['start'], help='serve the current folder')
  serve_parser.add_argument('--port', type=int, help='port to listen on (default: 5000)')
  serve_parser.add_argument('--host', help='interface to bind (default: 127.0.0.1)')
  serve_parser.set_defaults(handler=cmd_serve)

  return parser


def parse_args(parser: argparse.ArgumentParser, argv: list[str]) -> argparse.Namespace:
  """Parse arguments, enforcing that remove is given exactly one mode."""
  args = parser.parse_args(argv)

  if args.command is None:
    parser.error('a command is required')

  if args.command == 'remove':
    modes = [args.alias is not None, args.all, args.prune]
    if sum(modes) != 1:
      parser.error('remove takes exactly one of: an alias, --all, --prune')

  return args


def main(argv: list[str] | None = None) -> int:
  """Run a single ss command.

  Args:
      argv (list[str] | None): arguments, defaulting to sys.argv[1:]

  Returns:
      int: the exit code
  """
  parser = build_parser()
  argv = sys.argv[1:] if argv is None else argv

  if not argv:
    parser.print_help()
    return 0

  args = parse_args(parser, argv)

  try:
    config = Config(
      args.root,
      port=getattr(args, 'port', None),
      host=getattr(args, 'host', None),
    )
  except (ValueError, OSError) as e:
    print_error(f'Invalid configuration: {e}')
    return 1

  registry = AliasRegistry(config.root)

  try:
    registry.init()
    config.setup_logger()
    logger.info('Running %s', ' '.join(argv))
    return args.handler(registry, config, args)
  except SsError as e:
    print_error(str(e))
    return 1
  except OSError as e:
    print_error(f'Unexpected filesystem error: {e}')
    return 1


if __name__ == '__main__':
  sys.exit(main())
