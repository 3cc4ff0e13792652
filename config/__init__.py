# -*- coding: utf-8 -*-
"""
配置模块

功能：
- 加载 Exporter 配置（YAML 文件、环境变量、命令行参数）
- 验证配置
"""

from .loader import ConfigError, ExporterConfig, load_config, parse_endpoint
from .validator import validate_config
