# -*- coding: utf-8 -*-
"""
配置验证模块

功能：
- 验证配置的完整性和正确性
- 检查必填字段
- 验证字段格式和取值范围
"""

import re
from typing import Optional, Tuple

from config.loader import DEFAULT_COLLECTORS, ConfigError, ExporterConfig, parse_endpoint

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

# Linode API 允许的分页大小
MIN_PAGE_SIZE = 25
MAX_PAGE_SIZE = 500

RESERVED_PATHS = ['/', '/health']

# Prometheus 指标名前缀规则
NAMESPACE_PATTERN = re.compile(r'[a-zA-Z_:][a-zA-Z0-9_:]*')


def validate_config(config: ExporterConfig) -> Tuple[bool, Optional[str]]:
    """
    验证配置对象

    Args:
        config: 配置对象

    Returns:
        (is_valid, error_message) 元组，验证通过时 error_message 为 None
    """
    if not config.linode_token:
        return False, "Provide Linode API Token（--linode_token 或环境变量 LINODE_TOKEN）"

    try:
        _, port = parse_endpoint(config.endpoint)
    except ConfigError as e:
        return False, str(e)
    if not 1 <= port <= 65535:
        return False, f"端口必须在 1-65535 范围内: {port}"

    if not config.metrics_path.startswith('/'):
        return False, f"metrics_path 必须以 / 开头: {config.metrics_path}"
    if config.metrics_path in RESERVED_PATHS:
        return False, f"metrics_path 不能使用保留路径: {config.metrics_path}"

    if not config.namespace:
        return False, "namespace 不能为空"
    if not NAMESPACE_PATTERN.fullmatch(config.namespace):
        return False, f"namespace 不是合法的指标名前缀（[a-zA-Z_:][a-zA-Z0-9_:]*）: {config.namespace}"

    if config.request_timeout <= 0:
        return False, "request_timeout 必须大于 0"
    if config.scrape_timeout <= 0:
        return False, "scrape_timeout 必须大于 0"

    if not MIN_PAGE_SIZE <= config.page_size <= MAX_PAGE_SIZE:
        return False, f"page_size 必须在 {MIN_PAGE_SIZE}-{MAX_PAGE_SIZE} 范围内: {config.page_size}"

    if not config.collectors:
        return False, "至少需要启用一个 Collector"
    unknown = [name for name in config.collectors if name not in DEFAULT_COLLECTORS]
    if unknown:
        return False, f"未知的 Collector: {', '.join(unknown)}，可选值: {', '.join(DEFAULT_COLLECTORS)}"
    if len(set(config.collectors)) != len(config.collectors):
        return False, "Collector 不能重复启用"

    if config.log_level.upper() not in VALID_LOG_LEVELS:
        return False, f"log_level 必须是以下值之一: {', '.join(VALID_LOG_LEVELS)}"

    return True, None
