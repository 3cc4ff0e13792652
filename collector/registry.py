# -*- coding: utf-8 -*-
"""
Collector 注册模块

功能：
- 维护 Collector 名称到实现类的映射
- 按配置创建启用的 Collector 并注册到 CollectorRegistry
- 同时注册抓取统计指标
"""

import logging
from typing import Dict, List, Optional, Tuple, Type

from prometheus_client import CollectorRegistry

from collector.account import AccountCollector
from collector.base import ResourceCollector
from collector.exporter import ExporterCollector
from collector.instance import InstanceCollector
from collector.nodebalancer import NodeBalancerCollector
from collector.scrape_stats import ScrapeStats
from collector.ticket import TicketCollector
from collector.transfer import TransferCollector

logger = logging.getLogger(__name__)

COLLECTORS: Dict[str, Type[ResourceCollector]] = {
    'account': AccountCollector,
    'exporter': ExporterCollector,
    'instance': InstanceCollector,
    'nodebalancer': NodeBalancerCollector,
    'ticket': TicketCollector,
    'transfer': TransferCollector,
}


def create_collectors(client, config, stats: Optional[ScrapeStats] = None) -> List[ResourceCollector]:
    """
    按配置创建 Collector

    Args:
        client: 共享的 LinodeClient
        config: ExporterConfig
        stats: 抓取统计

    Returns:
        Collector 列表，顺序与 config.collectors 一致

    Raises:
        ValueError: 配置了未知的 Collector
    """
    collectors = []
    for name in config.collectors:
        collector_cls = COLLECTORS.get(name)
        if collector_cls is None:
            raise ValueError(f"未知的 Collector: {name}，可选值: {', '.join(sorted(COLLECTORS))}")

        kwargs = {
            'namespace': config.namespace,
            'scrape_timeout': config.scrape_timeout,
            'stats': stats,
        }
        if collector_cls is ExporterCollector:
            kwargs.update(os_version=config.os_version, git_commit=config.git_commit)

        collectors.append(collector_cls(client, **kwargs))
    return collectors


def build_registry(client, config) -> Tuple[CollectorRegistry, List[ResourceCollector]]:
    """
    创建 registry 并注册全部启用的 Collector

    注册时 prometheus_client 会调用每个 Collector 的 describe()，
    指标名重复会在这里抛出 ValueError

    Returns:
        (registry, collectors) 元组
    """
    registry = CollectorRegistry()
    stats = ScrapeStats(config.namespace, registry=registry)

    collectors = create_collectors(client, config, stats=stats)
    for collector in collectors:
        registry.register(collector)
        logger.info(f"[Registry] 已注册 Collector: {collector.name}")

    return registry, collectors
