"""总线依赖上下文 - 显式创建、显式传递的共享 Bus 实例"""

from dataclasses import dataclass, field
from typing import Optional

from autobus.modules.config import AutobusConfig, ConfigService
from autobus.modules.events import Bus
from autobus.modules.logging import configure_from_config, get_logger

logger = get_logger("BusContext")


@dataclass(frozen=True)
class BusContext:
    """所有协作组件的统一依赖上下文（不可变）

    应用启动时创建一次，通过构造函数传给需要发布或订阅事件的组件，
    保证它们共享同一条总线。
    """

    bus: Bus
    config: AutobusConfig = field(default_factory=AutobusConfig)


def create_bus_context(
    config: Optional[AutobusConfig] = None,
    base_dir: Optional[str] = None,
    configure_logging: bool = True,
) -> BusContext:
    """
    根据配置创建总线上下文

    Args:
        config: 已加载的配置；为 None 且给出 base_dir 时从 base_dir/config.toml 加载，否则使用默认配置
        base_dir: 配置文件所在目录
        configure_logging: 是否按 [logging] 配置日志系统

    Returns:
        BusContext
    """
    if config is None:
        config = ConfigService(base_dir).initialize() if base_dir else AutobusConfig()

    if configure_logging:
        configure_from_config(config.logging)

    bus = Bus(logging_enabled=config.bus.logging_enabled)
    logger.debug(f"Bus 创建完成 (logging_enabled={config.bus.logging_enabled})")
    return BusContext(bus=bus, config=config)
