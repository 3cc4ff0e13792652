# -*- coding: utf-8 -*-
"""
Exporter 配置加载模块

功能：
- 定义清晰的数据结构（ExporterConfig）
- 按优先级合并配置：默认值 < YAML 文件 < 环境变量 < 命令行参数
- 读取失败时给出明确错误
"""

import os
import platform
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from api.linode.client import DEFAULT_API_URL

DEFAULT_COLLECTORS = ['account', 'exporter', 'instance', 'nodebalancer', 'ticket', 'transfer']

# 环境变量 -> 配置字段
ENV_VARS = {
    'LINODE_TOKEN': 'linode_token',
    'LINODE_DEBUG': 'debug',
    'EXPORTER_ENDPOINT': 'endpoint',
    'EXPORTER_METRICS_PATH': 'metrics_path',
    'EXPORTER_NAMESPACE': 'namespace',
    'LINODE_API_URL': 'api_url',
    'LINODE_REQUEST_TIMEOUT': 'request_timeout',
    'EXPORTER_SCRAPE_TIMEOUT': 'scrape_timeout',
    'LINODE_PAGE_SIZE': 'page_size',
    'EXPORTER_COLLECTORS': 'collectors',
    'LOG_LEVEL': 'log_level',
    'OS_VERSION': 'os_version',
    'GIT_COMMIT': 'git_commit',
}

CONFIG_PATH_ENV = 'EXPORTER_CONFIG'

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')


class ConfigError(ValueError):
    """配置文件或配置值错误"""


@dataclass
class ExporterConfig:
    """Exporter 配置的根数据结构"""
    linode_token: str = ''                       # Linode API Token（必填）
    debug: bool = False                          # 记录每个 Linode API 请求
    endpoint: str = ':9388'                      # HTTP 监听地址 host:port
    metrics_path: str = '/metrics'               # 指标路径
    namespace: str = 'linode'                    # 指标命名空间
    api_url: str = DEFAULT_API_URL               # Linode API 根地址
    request_timeout: float = 10.0                # 单次 API 请求超时（秒）
    scrape_timeout: float = 30.0                 # 单个 Collector 单轮抓取截止时间（秒）
    page_size: int = 100                         # 列表分页大小
    collectors: List[str] = field(default_factory=lambda: list(DEFAULT_COLLECTORS))
    log_level: str = 'INFO'
    os_version: str = field(default_factory=platform.platform)
    git_commit: str = 'unknown'

    @property
    def host(self) -> str:
        return parse_endpoint(self.endpoint)[0]

    @property
    def port(self) -> int:
        return parse_endpoint(self.endpoint)[1]


def parse_endpoint(endpoint: str) -> Tuple[str, int]:
    """
    解析监听地址

    Args:
        endpoint: 形如 ":9388" 或 "127.0.0.1:9388"

    Returns:
        (host, port) 元组，host 为空时使用 0.0.0.0

    Raises:
        ConfigError: 格式错误
    """
    host, sep, port = endpoint.rpartition(':')
    if not sep:
        raise ConfigError(f"endpoint 格式错误（应为 host:port）: {endpoint!r}")
    try:
        port_number = int(port)
    except ValueError:
        raise ConfigError(f"endpoint 端口必须是整数: {endpoint!r}")
    return host or '0.0.0.0', port_number


def load_config(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Dict[str, Any]] = None
) -> ExporterConfig:
    """
    加载 Exporter 配置

    Args:
        config_path: YAML 配置文件路径；为 None 时读取环境变量 EXPORTER_CONFIG，仍为空则不读文件
        environ: 环境变量（默认 os.environ）
        overrides: 命令行参数覆盖值，值为 None 的项会被忽略

    Returns:
        ExporterConfig 对象

    Raises:
        FileNotFoundError: 配置文件不存在
        ConfigError: 配置格式或取值错误
    """
    if environ is None:
        environ = os.environ

    values: Dict[str, Any] = {}

    config_path = config_path or environ.get(CONFIG_PATH_ENV)
    if config_path:
        values.update(_load_yaml(config_path))

    for env_name, field_name in ENV_VARS.items():
        if env_name in environ:
            values[field_name] = environ[env_name]

    for field_name, value in (overrides or {}).items():
        if value is not None:
            values[field_name] = value

    field_types = {f.name: f.type for f in fields(ExporterConfig)}
    kwargs = {}
    for field_name, value in values.items():
        if field_name not in field_types:
            raise ConfigError(f"未知的配置项: {field_name}")
        kwargs[field_name] = _coerce(field_name, field_types[field_name], value)

    return ExporterConfig(**kwargs)


def _load_yaml(config_path: str) -> Dict[str, Any]:
    """从 YAML 文件读取配置字典"""
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"配置文件不存在: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML 解析失败: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError("配置格式错误: 顶层必须是字典类型")
    return data


def _coerce(field_name: str, field_type: Any, value: Any) -> Any:
    """把 YAML/环境变量/命令行中的值转换为字段类型"""
    try:
        if field_type in (bool, 'bool'):
            return _parse_bool(value)
        if field_type in (int, 'int'):
            if isinstance(value, bool):
                raise ValueError(value)
            return int(value)
        if field_type in (float, 'float'):
            if isinstance(value, bool):
                raise ValueError(value)
            return float(value)
        if field_type in (List[str], 'List[str]'):
            if isinstance(value, str):
                return [item.strip() for item in value.split(',') if item.strip()]
            if isinstance(value, (list, tuple)):
                return [str(item).strip() for item in value]
            raise ValueError(value)
        return str(value)
    except (TypeError, ValueError):
        raise ConfigError(f"配置项 {field_name} 的值无效: {value!r}")


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(value)
