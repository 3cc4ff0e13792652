# -*- coding: utf-8 -*-
"""
NodeBalancer Collector

功能：
- 列出全部 NodeBalancer
- 输出当月入站、出站、总流量（API 单位 MB，换算为 bytes）
"""

from typing import Iterable, List, Optional

from api.linode.models import NodeBalancer
from collector.base import ResourceCollector
from collector.descriptor import MIB, MetricDescriptor, Sample

NODEBALANCER_LABELS = ('nodebalancer_id', 'label', 'region')


class NodeBalancerCollector(ResourceCollector):

    name = 'nodebalancer'
    subsystem = 'nodebalancer'

    def _build_descriptors(self) -> Iterable[MetricDescriptor]:
        self.transfer_in = self._new_desc(
            'transfer_in_bytes', 'Inbound transfer in current billing period', NODEBALANCER_LABELS)
        self.transfer_out = self._new_desc(
            'transfer_out_bytes', 'Outbound transfer in current billing period', NODEBALANCER_LABELS)
        self.transfer_total = self._new_desc(
            'transfer_total_bytes', 'Total transfer in current billing period', NODEBALANCER_LABELS)
        return [self.transfer_in, self.transfer_out, self.transfer_total]

    def _list_resources(self, timeout: Optional[float]) -> List[NodeBalancer]:
        return self.client.list_nodebalancers(timeout=timeout)

    def _samples_for(self, resource: NodeBalancer, detail: NodeBalancer) -> Iterable[Sample]:
        label_values = (str(resource.id), resource.label, resource.region)
        yield self.transfer_in.sample(resource.transfer_in_mb * MIB, label_values)
        yield self.transfer_out.sample(resource.transfer_out_mb * MIB, label_values)
        yield self.transfer_total.sample(resource.transfer_total_mb * MIB, label_values)
