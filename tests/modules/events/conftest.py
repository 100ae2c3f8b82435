"""
事件系统测试 fixtures
"""

import pytest

from tests.modules.events.stubs import RecordingAnyDataListener, RecordingListener


@pytest.fixture
def stub_listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def any_listener() -> RecordingAnyDataListener:
    return RecordingAnyDataListener()
