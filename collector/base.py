# -*- coding: utf-8 -*-
"""
Resource Collector 基类

功能：
- 定义资源类 Collector 的统一生命周期（describe / collect）
- 实现 list -> 逐个 detail -> 样本 的采集流程
- 统一处理失败：列表失败放弃本轮，单个资源失败只跳过该资源
- 为每轮抓取设置截止时间，并把剩余时间传递给每次 API 调用
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Tuple

from prometheus_client.core import Metric

from api.linode.client import LinodeAPIError
from collector.descriptor import MetricDescriptor, MetricKind, Sample, build_fq_name
from collector.scrape_stats import ERROR_DEADLINE, ERROR_DETAIL, ERROR_LIST, ScrapeStats

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = 'linode'


class ScrapeDeadline:
    """
    单轮抓取的截止时间

    seconds 为 None 时不设截止时间，remaining() 返回 None；已超时时 remaining() 返回 0.0
    """

    def __init__(self, seconds: Optional[float]):
        self._expires_at = time.monotonic() + seconds if seconds else None

    def remaining(self) -> Optional[float]:
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())


class ResourceCollector(ABC):
    """
    资源类 Collector 接口

    子类负责：
    - _build_descriptors: 构造本 Collector 拥有的描述符（构造时调用一次）
    - _list_resources: 一次不过滤的列表调用
    - _fetch_detail: 按资源 ID 获取子资源详情（默认直接返回资源本身，不做 I/O）
    - _samples_for: 把一个资源及其详情转换为样本

    实现了 prometheus_client 的自定义 Collector 协议，可以直接注册到 CollectorRegistry
    """

    # Collector 名称，用作 scrape 统计指标的 collector 标签
    name = ''
    # 指标子系统，如 "transfer"
    subsystem = ''

    def __init__(
        self,
        client: Any,
        namespace: str = DEFAULT_NAMESPACE,
        scrape_timeout: Optional[float] = None,
        stats: Optional[ScrapeStats] = None
    ):
        """
        初始化 Collector

        Args:
            client: 上游 API 客户端（可在多个 Collector 之间共享）
            namespace: 指标命名空间
            scrape_timeout: 单轮抓取的截止时间（秒），None 表示不限制
            stats: 抓取统计（可选）
        """
        self.client = client
        self.namespace = namespace
        self.scrape_timeout = scrape_timeout
        self.stats = stats
        self._descriptors: Tuple[MetricDescriptor, ...] = tuple(self._build_descriptors())
        logger.debug(f"[{type(self).__name__}] 初始化完成，描述符数量: {len(self._descriptors)}")

    def _new_desc(
        self,
        name: str,
        help_text: str,
        label_names: Sequence[str] = (),
        kind: MetricKind = MetricKind.GAUGE
    ) -> MetricDescriptor:
        """在本 Collector 的 namespace/subsystem 下构造描述符"""
        return MetricDescriptor(
            fq_name=build_fq_name(self.namespace, self.subsystem, name),
            help=help_text,
            label_names=tuple(label_names),
            kind=kind
        )

    @abstractmethod
    def _build_descriptors(self) -> Iterable[MetricDescriptor]:
        pass

    @abstractmethod
    def _list_resources(self, timeout: Optional[float]) -> Sequence[Any]:
        pass

    def _fetch_detail(self, resource: Any, timeout: Optional[float]) -> Any:
        return resource

    @abstractmethod
    def _samples_for(self, resource: Any, detail: Any) -> Iterable[Sample]:
        pass

    def _resource_key(self, resource: Any) -> str:
        """资源标识（用于日志）"""
        return str(getattr(resource, 'id', resource))

    def descriptors(self) -> Iterator[MetricDescriptor]:
        """
        返回全部描述符

        不做任何 I/O，可重复调用
        """
        return iter(self._descriptors)

    def describe(self) -> Iterator[Metric]:
        """prometheus_client describe 接口：每个描述符对应一个空指标族"""
        tag = f"{type(self).__name__}:Describe"
        logger.debug(f"[{tag}] Entered")
        for descriptor in self._descriptors:
            yield descriptor.new_family()
        logger.debug(f"[{tag}] Completes")

    def collect(self) -> Iterator[Metric]:
        """
        prometheus_client collect 接口

        消费 samples() 并按描述符分组为指标族；没有样本的指标族不输出
        """
        families: Dict[str, Metric] = {}
        for sample in self.samples():
            family = families.get(sample.descriptor.fq_name)
            if family is None:
                family = sample.descriptor.new_family()
                families[sample.descriptor.fq_name] = family
            family.add_metric(list(sample.label_values), sample.value)

        for descriptor in self._descriptors:
            if descriptor.fq_name in families:
                yield families[descriptor.fq_name]

    def samples(self) -> Iterator[Sample]:
        """
        执行一轮抓取，逐个产出样本

        失败处理：
        - 列表调用失败：记录错误，本轮不产出任何样本
        - 单个资源详情失败：记录错误，跳过该资源，继续处理其余资源
        - 超过截止时间：记录告警，跳过剩余资源
        两种失败都不会抛出到调用方
        """
        tag = f"{type(self).__name__}:Collect"
        logger.debug(f"[{tag}] Entered")
        start_time = time.monotonic()
        deadline = ScrapeDeadline(self.scrape_timeout)

        try:
            try:
                resources = self._list_resources(deadline.remaining())
            except LinodeAPIError as e:
                logger.error(f"[{tag}] 列表调用失败，本轮不输出样本: {e}")
                self._record_error(ERROR_LIST)
                return

            logger.debug(f"[{tag}] len(resources)={len(resources)}")

            for index, resource in enumerate(resources):
                # 只读一次时钟，过期判断和传给详情调用的超时取同一个值
                remaining = deadline.remaining()
                if remaining is not None and remaining <= 0:
                    logger.warning(
                        f"[{tag}] 超过抓取截止时间 {self.scrape_timeout}s，"
                        f"跳过剩余 {len(resources) - index} 个资源"
                    )
                    self._record_error(ERROR_DEADLINE)
                    return

                key = self._resource_key(resource)
                try:
                    detail = self._fetch_detail(resource, remaining)
                except LinodeAPIError as e:
                    logger.error(f"[{tag}] 获取资源 {key} 详情失败，跳过: {e}")
                    self._record_error(ERROR_DETAIL)
                    continue

                yield from self._samples_for(resource, detail)

            logger.debug(f"[{tag}] Completes")
        finally:
            self._observe_duration(time.monotonic() - start_time)

    def _record_error(self, error_type: str):
        if self.stats is not None:
            self.stats.record_error(self.name, error_type)

    def _observe_duration(self, seconds: float):
        if self.stats is not None:
            self.stats.observe_duration(self.name, seconds)
