"""
Pytest 全局共享 fixtures

这个文件定义了跨多个测试模块共享的 fixtures。
如果某个 fixture 只在特定模块使用，应该放在该模块的 conftest.py 中。
"""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from autobus.modules.events import Bus


@pytest.fixture
def temp_config_dir() -> Generator[Path, None, None]:
    """
    创建临时配置目录

    Yields:
        Path: 临时目录路径
    """
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def bus() -> Bus:
    """
    创建干净的 Bus 实例

    每个测试获得独立的事件总线，避免测试间相互干扰。
    """
    return Bus()
