# -*- coding: utf-8 -*-
"""
Prometheus Collector 模块

功能：
- 定义资源类 Collector 的统一协议（describe / collect）
- 每种 Linode 资源一个 Collector
- 按配置注册到 CollectorRegistry
"""

from .base import DEFAULT_NAMESPACE, ResourceCollector, ScrapeDeadline
from .descriptor import MetricDescriptor, MetricKind, Sample, build_fq_name
from .registry import COLLECTORS, build_registry, create_collectors
from .scrape_stats import ScrapeStats
from .transfer import TransferCollector
