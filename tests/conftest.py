import pytest

from tests.mock_transport import RecordingHandler


@pytest.fixture
def handler():
    """Default handler answering 200 with a small JSON body"""
    return RecordingHandler(body=b'{"ok":true}')
