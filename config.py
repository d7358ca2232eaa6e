"""Loads a config object for ss.

Settings come from built-in defaults, overlaid by <root>/config.json when it
exists, overlaid by any explicit overrides (usually from the command line).
"""

import json
import os
from logging import INFO, NullHandler, getLogger
from typing import Any

from src.logs import create_file_log_handler, reset_handlers

logger = getLogger('ss')
# no output until setup_logger() is called
logger.addHandler(NullHandler())

CONFIG_FILENAME = 'config.json'

DEFAULTS: dict[str, Any] = {
  'host': '127.0.0.1',
  'port': 5000,
  'log_file': None,
}


def default_root() -> str:
  """Return the registry root to use when none is given.

  The SS_HOME environment variable takes precedence over ~/.ss
  """
  return os.environ.get('SS_HOME') or os.path.join(os.path.expanduser('~'), '.ss')


class Config:
  """A config class used throughout ss."""

  # Enables autocomplete
  root: str
  host: str
  port: int
  log_file: str

  def __init__(self, root: str | None = None, **overrides: Any) -> None:
    """Resolve the registry root, then load and validate settings."""
    root = os.path.abspath(os.path.expanduser(root or default_root()))

    self.config: dict[str, Any] = dict(DEFAULTS)
    self.config.update(self.__read_config_file(root))
    self.config.update({key: value for key, value in overrides.items() if value is not None})
    self.config['root'] = root

    if not self.config['log_file']:
      self.config['log_file'] = os.path.join(root, 'ss.log')

    self.config['port'] = self.__validate_port(self.config['port'])

  def __read_config_file(self, root: str) -> dict[str, Any]:
    """Read <root>/config.json if there is one.

    Args:
        root (str): the registry root

    Returns:
        dict[str, Any]: settings from the file, or an empty dict
    """
    path = os.path.join(root, CONFIG_FILENAME)
    if not os.path.isfile(path):
      return {}

    with open(path, 'r', encoding='utf-8-sig') as file:
      settings = json.load(file)

    if not isinstance(settings, dict):
      raise ValueError(f'{path} must contain a JSON object')

    # the root is where the file was found, it cannot move itself
    settings.pop('root', None)
    return settings

  def __validate_port(self, port: Any) -> int:
    """Ensure the port is an integer in the valid TCP range."""
    if isinstance(port, bool):
      raise ValueError(f'port must be an integer, not {port!r}')
    try:
      port = int(port)
    except (TypeError, ValueError) as e:
      raise ValueError(f'port must be an integer, not {port!r}') from e
    if not 1 <= port <= 65535:
      raise ValueError(f'port must be between 1 and 65535, not {port}')
    return port

  def setup_logger(self) -> None:
    """Point the ss logger at this config's log file."""
    reset_handlers(logger)
    logger.setLevel(INFO)
    logger.addHandler(create_file_log_handler(self.log_file))

  def __getattr__(self, name: str) -> Any:
    """Get attribute from config dict.

    Args:
        name (str): the name of the setting
    """
    if name == 'config':
      raise AttributeError(name)
    try:
      return self.config[name]
    except KeyError as e:
      raise AttributeError(name) from e
