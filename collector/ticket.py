# -*- coding: utf-8 -*-
"""
工单 Collector

功能：
- 列出全部支持工单
- 按状态（new / open / closed）统计数量
"""

from collections import Counter
from typing import Iterable, List, Optional, Tuple

from collector.base import ResourceCollector
from collector.descriptor import MetricDescriptor, Sample


class TicketCollector(ResourceCollector):
    """
    工单 Collector

    列表结果先按状态聚合，每个状态作为一个"资源"输出一个样本
    """

    name = 'ticket'
    subsystem = 'ticket'

    def _build_descriptors(self) -> Iterable[MetricDescriptor]:
        self.count = self._new_desc('count', 'Number of support tickets', ['status'])
        return [self.count]

    def _list_resources(self, timeout: Optional[float]) -> List[Tuple[str, int]]:
        tickets = self.client.list_tickets(timeout=timeout)
        # Counter 保留首次出现的顺序
        return list(Counter(ticket.status for ticket in tickets).items())

    def _resource_key(self, resource: Tuple[str, int]) -> str:
        return resource[0]

    def _samples_for(self, resource: Tuple[str, int], detail: Tuple[str, int]) -> Iterable[Sample]:
        status, count = resource
        yield self.count.sample(count, [status])
