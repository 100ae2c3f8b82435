"""
ConfigService - 配置加载服务

从 base_dir 下的 config.toml 加载配置并用 Pydantic 校验。
配置文件不存在时使用默认值。
"""

import os
import tomllib
from typing import Any, Dict, Optional

from autobus.modules.config.schemas import AutobusConfig
from autobus.modules.logging import get_logger


class ConfigService:
    """
    配置管理服务

    使用示例:
        config_service = ConfigService(base_dir="/path/to/project")
        config = config_service.initialize()
        bus_section = config_service.get_section("bus")
    """

    def __init__(self, base_dir: str, config_name: str = "config.toml"):
        self.base_dir = base_dir
        self.config_name = config_name
        self._config: Optional[AutobusConfig] = None
        self.logger = get_logger("ConfigService")

    @property
    def config_path(self) -> str:
        return os.path.join(self.base_dir, self.config_name)

    @property
    def config(self) -> AutobusConfig:
        """当前配置，未初始化时返回默认配置"""
        if self._config is None:
            self.logger.warning("ConfigService 未初始化，返回默认配置")
            return AutobusConfig()
        return self._config

    def initialize(self) -> AutobusConfig:
        """
        加载并校验配置文件

        Returns:
            校验后的配置

        Raises:
            tomllib.TOMLDecodeError: 配置文件不是合法的 TOML
            pydantic.ValidationError: 配置内容不符合 Schema
        """
        if self._config is not None:
            self.logger.warning("ConfigService 已经初始化，跳过重复初始化")
            return self._config

        if not os.path.exists(self.config_path):
            self.logger.warning(f"配置文件不存在，使用默认配置: {self.config_path}")
            self._config = AutobusConfig()
            return self._config

        with open(self.config_path, "rb") as f:
            raw = tomllib.load(f)

        self._config = AutobusConfig.model_validate(raw)
        self.logger.info(f"已加载配置: {self.config_path}")
        return self._config

    def get_section(self, section_name: str) -> Dict[str, Any]:
        """获取配置节（dict），不存在时返回空字典"""
        if section_name not in AutobusConfig.model_fields:
            return {}
        return getattr(self.config, section_name).model_dump()

    def write_template(self, overwrite: bool = False) -> bool:
        """
        在 base_dir 写入配置模板

        Returns:
            是否写入了文件
        """
        if os.path.exists(self.config_path) and not overwrite:
            return False
        os.makedirs(self.base_dir, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write(AutobusConfig.generate_toml())
        self.logger.info(f"已生成配置模板: {self.config_path}")
        return True
