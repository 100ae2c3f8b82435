"""
ConfigService 与配置 Schema 测试

运行: uv run pytest tests/modules/config/test_config_service.py -v
"""

import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError

from autobus.modules.config import AutobusConfig, BusConfig, ConfigService, LoggingConfig


def test_defaults():
    """测试默认配置"""
    config = AutobusConfig()

    assert config.bus.logging_enabled is True
    assert config.logging.enabled is False
    assert config.logging.format == "jsonl"
    assert config.logging.filter is None


def test_template_is_valid_toml():
    """测试生成的模板可以解析并通过校验，且与默认值一致"""
    raw = tomllib.loads(AutobusConfig.generate_toml())

    config = AutobusConfig.model_validate(raw)

    assert config == AutobusConfig()


def test_missing_file_uses_defaults(temp_config_dir: Path):
    """测试配置文件不存在时使用默认配置"""
    service = ConfigService(base_dir=str(temp_config_dir))

    config = service.initialize()

    assert config == AutobusConfig()


def test_load_config_file(temp_config_dir: Path):
    """测试加载配置文件"""
    (temp_config_dir / "config.toml").write_text(
        '[bus]\nlogging_enabled = false\n\n[logging]\nformat = "text"\nconsole_level = "DEBUG"\n',
        encoding="utf-8",
    )
    service = ConfigService(base_dir=str(temp_config_dir))

    config = service.initialize()

    assert config.bus == BusConfig(logging_enabled=False)
    assert config.logging.format == "text"
    assert config.logging.console_level == "DEBUG"
    assert config.logging.directory == "logs"
    assert service.get_section("bus") == {"logging_enabled": False}


def test_invalid_config_raises(temp_config_dir: Path):
    """测试配置不符合 Schema 时报错"""
    (temp_config_dir / "config.toml").write_text('[logging]\nformat = "xml"\n', encoding="utf-8")

    with pytest.raises(ValidationError):
        ConfigService(base_dir=str(temp_config_dir)).initialize()


def test_invalid_toml_raises(temp_config_dir: Path):
    """测试非法 TOML 报错"""
    (temp_config_dir / "config.toml").write_text("[bus\n", encoding="utf-8")

    with pytest.raises(tomllib.TOMLDecodeError):
        ConfigService(base_dir=str(temp_config_dir)).initialize()


def test_initialize_twice_returns_same_config(temp_config_dir: Path):
    """测试重复初始化返回同一配置"""
    service = ConfigService(base_dir=str(temp_config_dir))

    assert service.initialize() is service.initialize()


def test_config_before_initialize_returns_defaults(temp_config_dir: Path):
    """测试未初始化时返回默认配置"""
    service = ConfigService(base_dir=str(temp_config_dir))

    assert service.config == AutobusConfig()
    assert service.get_section("unknown") == {}


@pytest.mark.parametrize("name", ["model_config", "generate_toml", "model_dump"])
def test_get_section_ignores_non_section_attributes(temp_config_dir: Path, name):
    """测试模型自身的属性和方法不会被当作配置节"""
    service = ConfigService(base_dir=str(temp_config_dir))
    service.initialize()

    assert service.get_section(name) == {}
    assert service.get_section("logging")["format"] == "jsonl"


def test_write_template(temp_config_dir: Path):
    """测试写入配置模板，已存在时不覆盖"""
    service = ConfigService(base_dir=str(temp_config_dir / "nested"))

    assert service.write_template() is True
    assert service.write_template() is False
    assert Path(service.config_path).read_text(encoding="utf-8") == AutobusConfig.generate_toml()


def test_logging_config_rejects_unknown_format():
    """测试日志格式校验"""
    with pytest.raises(ValidationError):
        LoggingConfig(format="xml")
