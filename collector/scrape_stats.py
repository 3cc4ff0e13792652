# -*- coding: utf-8 -*-
"""
Exporter 自身抓取指标

功能：
- 记录每个 Collector 的抓取错误次数（按错误类型）
- 记录每个 Collector 的抓取耗时
"""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram

from collector.descriptor import build_fq_name

# 错误类型（error_type 标签取值）
ERROR_LIST = 'list'          # 列表调用失败，本轮无样本
ERROR_DETAIL = 'detail'      # 单个资源的详情调用失败，跳过该资源
ERROR_DEADLINE = 'deadline'  # 超过抓取截止时间，跳过剩余资源


class ScrapeStats:
    """
    抓取统计

    Counter/Histogram 本身是线程安全的，可被并发抓取共享
    """

    def __init__(self, namespace: str, registry: Optional[CollectorRegistry] = None):
        """
        初始化抓取统计指标

        Args:
            namespace: 指标命名空间
            registry: 注册到的 registry；为 None 时不注册（测试用）
        """
        self.scrape_errors_total = Counter(
            build_fq_name(namespace, 'exporter', 'scrape_errors_total'),
            'Total number of collector scrape errors',
            ['collector', 'error_type'],
            registry=registry
        )

        self.scrape_duration_seconds = Histogram(
            build_fq_name(namespace, 'exporter', 'scrape_duration_seconds'),
            'Duration of a collector scrape in seconds',
            ['collector'],
            buckets=[0.1, 0.5, 1.0, 5.0, 10.0, 30.0, 60.0],
            registry=registry
        )

    def record_error(self, collector: str, error_type: str):
        self.scrape_errors_total.labels(collector=collector, error_type=error_type).inc()

    def observe_duration(self, collector: str, seconds: float):
        self.scrape_duration_seconds.labels(collector=collector).observe(seconds)

