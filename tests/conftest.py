import pytest
from werkzeug.test import Client
from werkzeug.wrappers import Response

from key_gate import create_gate

VALID_KEY = "some-api-key"


class DownstreamApp:
    """Records the environ it was called with and answers 200."""

    def __init__(self):
        self.calls = []

    def __call__(self, environ, start_response):
        self.calls.append(environ)
        return Response("downstream", status=200)(environ, start_response)

    @property
    def last_environ(self):
        return self.calls[-1]


@pytest.fixture
def downstream():
    return DownstreamApp()


@pytest.fixture
def make_client(downstream):
    def _make(**overrides):
        config = {"keys": [VALID_KEY]}
        config.update(overrides)
        gate = create_gate(downstream, config)
        return Client(gate)

    return _make
