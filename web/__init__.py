"""Static file server for the current ss target."""

import os
import posixpath
from logging import getLogger

from flask import Flask, Response, abort, current_app, redirect, request, send_from_directory
from flask.typing import ResponseReturnValue
from werkzeug.security import safe_join

logger = getLogger('ss')

INDEX_FILE = 'index.html'


def serve_path(path: str) -> ResponseReturnValue:
  """Serve root/<path>, or the index file of a directory."""
  root = current_app.config['SS_ROOT']

  full_path = safe_join(root, path)
  if full_path is None:
    abort(404)

  if os.path.isdir(full_path):
    # relative links in an index only work from a path ending in a slash
    if path and not path.endswith('/'):
      location = request.path + '/'
      if request.query_string:
        location += '?' + request.query_string.decode()
      return redirect(location, code=308)
    path = posixpath.join(path, INDEX_FILE)

  return send_from_directory(root, path)


def create_app(root: str) -> Flask:
  """Create an app serving files under the given root directory.

  Args:
      root (str): absolute path of the directory to serve

  Returns:
      Flask: the app
  """
  app = Flask(__name__)
  app.config['SS_ROOT'] = root

  app.add_url_rule('/', 'index', serve_path, defaults={'path': ''})
  app.add_url_rule('/<path:path>', 'serve_path', serve_path)

  @app.after_request
  def log_request(response: Response) -> Response:
    logger.info('%s %s %s', request.method, request.path, response.status_code)
    return response

  return app
