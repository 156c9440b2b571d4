import pytest

from tests.helpers import FakeTime


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()
