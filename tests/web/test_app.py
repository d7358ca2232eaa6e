"""Tests of the static file app."""

from flask.testing import FlaskClient


class TestServeFiles:
  """Tests for GET /<path>."""

  def test_files_are_served_from_root(self, client: FlaskClient) -> None:
    """URL paths map onto files under the root."""
    response = client.get('/index.html')

    assert response.status_code == 200
    assert response.data == b'<h1>home</h1>'

    response = client.get('/css/site.css')

    assert response.status_code == 200
    assert response.data == b'body {}'
    assert response.mimetype == 'text/css'

  def test_root_serves_index(self, client: FlaskClient) -> None:
    """The root URL serves index.html."""
    response = client.get('/')

    assert response.status_code == 200
    assert response.data == b'<h1>home</h1>'

  def test_directory_serves_index(self, client: FlaskClient) -> None:
    """A directory URL ending in a slash serves that directory's index.html."""
    response = client.get('/docs/')

    assert response.status_code == 200
    assert response.data == b'<h1>docs</h1>'

  def test_directory_without_slash_redirects(self, client: FlaskClient) -> None:
    """A directory URL without a trailing slash is redirected to one with it."""
    response = client.get('/docs')

    assert response.status_code == 308
    assert response.headers['Location'].endswith('/docs/')

  def test_redirect_keeps_query_string(self, client: FlaskClient) -> None:
    """The trailing slash redirect preserves the query string."""
    response = client.get('/docs?lang=en&v=2')

    assert response.status_code == 308
    assert response.headers['Location'].endswith('/docs/?lang=en&v=2')

  def test_directory_without_index_is_not_found(self, client: FlaskClient) -> None:
    """A directory with no index.html is a 404."""
    response = client.get('/empty/')

    assert response.status_code == 404

  def test_missing_files_are_not_found(self, client: FlaskClient) -> None:
    """Files that do not exist are a 404."""
    response = client.get('/nope.html')

    assert response.status_code == 404

  def test_files_outside_root_are_not_found(self, client: FlaskClient) -> None:
    """Paths escaping the root are a 404."""
    response = client.get('/../../etc/secret.txt')

    assert response.status_code == 404

    response = client.get('/%2e%2e/%2e%2e/etc/secret.txt')

    assert response.status_code == 404
