"""
autobus 基础模块层

包含事件总线及其依赖的基础设施模块。
"""
