from unittest.mock import MagicMock

import pytest
import requests
from requests.exceptions import HTTPError

from markpress.exceptions import MarkpressAuthenticationError, WordPressApiError
from markpress.utils.decorators import handle_wordpress_api_errors


def _http_error(status_code):
    response = MagicMock(status_code=status_code, text="details")
    return HTTPError(f"{status_code} Error", response=response)


class DummyClient:
    def __init__(self, error=None):
        self.error = error

    @handle_wordpress_api_errors("Test API")
    def fetch(self, value):
        if self.error:
            raise self.error
        return value


def test_passes_through_results():
    assert DummyClient().fetch(3) == 3


def test_preserves_function_name():
    assert DummyClient.fetch.__name__ == "fetch"


@pytest.mark.parametrize("status_code", [401, 403])
def test_auth_error(status_code):
    with pytest.raises(MarkpressAuthenticationError) as exc:
        DummyClient(_http_error(status_code)).fetch(1)
    assert exc.value.status_code == status_code
    assert "Authentication failed for Test API" in str(exc.value)


def test_http_error_keeps_status():
    with pytest.raises(WordPressApiError) as exc:
        DummyClient(_http_error(404)).fetch(1)
    assert exc.value.status_code == 404
    assert "Test API fetch failed" in str(exc.value)


def test_http_error_without_response():
    with pytest.raises(WordPressApiError) as exc:
        DummyClient(HTTPError("no response")).fetch(1)
    assert exc.value.status_code is None


def test_network_error():
    with pytest.raises(WordPressApiError) as exc:
        DummyClient(requests.Timeout("timed out")).fetch(1)
    assert exc.value.status_code is None
    assert "timed out" in str(exc.value)


def test_other_exceptions_are_not_wrapped():
    with pytest.raises(KeyError):
        DummyClient(KeyError("missing")).fetch(1)
