# -*- coding: utf-8 -*-
"""
指标描述与样本数据结构

功能：
- 定义 MetricDescriptor（指标名、帮助文本、标签名）
- 定义 Sample（一次抓取中产生的单个样本）
- 保证样本的标签值数量与描述符的标签名数量一致
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric


# 字节单位换算
MIB = 1024 * 1024
GIB = 1024 * MIB


class MetricKind(Enum):
    """样本值类型"""
    GAUGE = "gauge"
    COUNTER = "counter"


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """
    拼接完整指标名

    空的部分会被跳过，例如 ("linode", "transfer", "used_bytes") -> "linode_transfer_used_bytes"
    """
    return '_'.join(part for part in (namespace, subsystem, name) if part)


@dataclass(frozen=True)
class MetricDescriptor:
    """
    指标描述符

    在 Collector 构造时创建一次，之后只读，可在并发抓取之间共享
    """
    fq_name: str                       # 完整指标名（namespace_subsystem_name）
    help: str                          # 帮助文本
    label_names: Tuple[str, ...] = ()  # 有序标签名
    kind: MetricKind = MetricKind.GAUGE

    def sample(self, value: float, label_values: Iterable[str]) -> 'Sample':
        """按本描述符构造一个样本"""
        return Sample(
            descriptor=self,
            value=float(value),
            label_values=tuple(label_values),
            kind=self.kind
        )

    def new_family(self) -> Metric:
        """创建空的 prometheus_client 指标族（describe 和 collect 共用）"""
        if self.kind is MetricKind.COUNTER:
            return CounterMetricFamily(self.fq_name, self.help, labels=list(self.label_names))
        return GaugeMetricFamily(self.fq_name, self.help, labels=list(self.label_names))


@dataclass(frozen=True)
class Sample:
    """
    单个样本

    只在一次 collect 调用内存在，交给 registry 后即丢弃
    """
    descriptor: MetricDescriptor
    value: float
    label_values: Tuple[str, ...]
    kind: MetricKind = MetricKind.GAUGE

    def __post_init__(self):
        expected = len(self.descriptor.label_names)
        if len(self.label_values) != expected:
            raise ValueError(
                f"{self.descriptor.fq_name}: 标签值数量 {len(self.label_values)} "
                f"与标签名数量 {expected} 不一致"
            )

    @property
    def labels(self) -> dict:
        """标签名到标签值的映射"""
        return dict(zip(self.descriptor.label_names, self.label_values))
