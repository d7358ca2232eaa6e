"""Setups common fixtures for tests."""

import pytest
from flask.testing import FlaskClient
from pyfakefs.fake_filesystem import FakeFilesystem

import web

SITE_ROOT = '/var/www'


@pytest.fixture(autouse=True)
def setup_filesystem(fs: FakeFilesystem) -> None:
  """Set up the filesystem."""
  # flask.testing requires metadata for this package to be available
  fs.add_package_metadata('werkzeug')

  fs.create_file(f'{SITE_ROOT}/index.html', contents='<h1>home</h1>')
  fs.create_file(f'{SITE_ROOT}/css/site.css', contents='body {}')
  fs.create_file(f'{SITE_ROOT}/docs/index.html', contents='<h1>docs</h1>')
  fs.create_dir(f'{SITE_ROOT}/empty')
  fs.create_file('/etc/secret.txt', contents='secret')


@pytest.fixture(name='client')
def fixture_client() -> FlaskClient:
  """Return a Flask client serving the site root."""
  return web.create_app(SITE_ROOT).test_client()
