# -*- coding: utf-8 -*-
"""
实例流量 Collector

功能：
- 列出全部 Linode 实例，逐个获取当月流量
- 输出已用流量、流量配额、超额计费流量三个指标（单位统一为 bytes）
"""

import logging
from typing import Iterable, List, Optional

from api.linode.models import Instance, InstanceTransfer
from collector.base import ResourceCollector
from collector.descriptor import GIB, MetricDescriptor, Sample

logger = logging.getLogger(__name__)

TRANSFER_LABELS = ('linode_id', 'label', 'region')


class TransferCollector(ResourceCollector):
    """
    实例流量 Collector

    每个实例输出 3 个样本，共享同一组标签值 (linode_id, label, region)
    """

    name = 'transfer'
    subsystem = 'transfer'

    def _build_descriptors(self) -> Iterable[MetricDescriptor]:
        self.used_bytes = self._new_desc(
            'used_bytes',
            'Total transfer used in current billing period',
            TRANSFER_LABELS
        )
        self.quota_bytes = self._new_desc(
            'quota_bytes',
            'Monthly transfer quota',
            TRANSFER_LABELS
        )
        self.billable_bytes = self._new_desc(
            'billable_bytes',
            'Transfer that exceeds quota (billable)',
            TRANSFER_LABELS
        )
        return [self.used_bytes, self.quota_bytes, self.billable_bytes]

    def _list_resources(self, timeout: Optional[float]) -> List[Instance]:
        return self.client.list_instances(timeout=timeout)

    def _fetch_detail(self, resource: Instance, timeout: Optional[float]) -> InstanceTransfer:
        logger.debug(f"[TransferCollector:Collect] Linode ID ({resource.id})")
        return self.client.get_instance_transfer(resource.id, timeout=timeout)

    def _samples_for(self, resource: Instance, detail: InstanceTransfer) -> Iterable[Sample]:
        label_values = (str(resource.id), resource.label, resource.region)

        # used 和 billable 已经是 bytes
        yield self.used_bytes.sample(detail.used, label_values)
        # quota 从 GiB 换算为 bytes
        yield self.quota_bytes.sample(detail.quota * GIB, label_values)
        yield self.billable_bytes.sample(detail.billable, label_values)
