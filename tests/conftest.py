import os

import pytest

os.environ.setdefault("BYTEBUF_DISABLE_CONSOLE", "1")

from bytebuf.runtime.limits import reset_limits  # noqa: E402


@pytest.fixture(autouse=True)
def restore_limits():
    reset_limits()
    yield
    reset_limits()
