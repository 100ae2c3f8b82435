"""
配置 Schema

定义 config.toml 的结构：
- [bus]: 事件总线
- [logging]: 日志系统
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """日志配置"""

    enabled: bool = Field(default=False, description="启用文件日志")
    format: Literal["jsonl", "text"] = Field(
        default="jsonl", description="文件日志格式：jsonl（每行一个JSON对象）或 text（纯文本）"
    )
    directory: str = Field(default="logs", description="日志目录")
    level: str = Field(default="INFO", description="文件日志最低级别（DEBUG, INFO, WARNING, ERROR, CRITICAL）")
    console_level: str = Field(default="INFO", description="控制台日志最低级别")
    rotation: str = Field(default="10 MB", description="文本日志轮转触发条件")
    retention: str = Field(default="7 days", description="文本日志保留时间")
    compression: str = Field(default="zip", description="文本日志压缩格式")
    split_by_session: bool = Field(default=False, description="是否按会话分割日志文件")
    filter: Optional[List[str]] = Field(default=None, description="仅显示这些模块的 INFO/DEBUG 日志")


class BusConfig(BaseModel):
    """事件总线配置"""

    logging_enabled: bool = Field(default=True, description="输出订阅/发布/过滤的诊断日志")


class AutobusConfig(BaseModel):
    """主配置"""

    bus: BusConfig = Field(default_factory=BusConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def generate_toml(cls) -> str:
        """生成 TOML 配置模板"""
        return """# 事件总线配置
[bus]
# 输出订阅/发布/过滤的诊断日志
logging_enabled = true

# 日志配置
[logging]
# 启用文件日志
enabled = false
# 日志格式：jsonl（每行一个JSON对象）或 text（纯文本）
format = "jsonl"
# 日志目录
directory = "logs"
# 文件日志最低级别（DEBUG, INFO, WARNING, ERROR, CRITICAL）
level = "INFO"
# 控制台日志最低级别
console_level = "INFO"
# 文本日志轮转触发条件（如 '10 MB', '1 GB'）
rotation = "10 MB"
# 文本日志保留时间（如 '7 days', '1 month'）
retention = "7 days"
# 压缩格式（zip, gz, tar, tar.gz）
compression = "zip"
# 是否按会话分割日志文件
split_by_session = false
"""
