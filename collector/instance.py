# -*- coding: utf-8 -*-
"""
实例 Collector

功能：
- 列出全部 Linode 实例
- 输出运行状态和规格（vCPU、内存、磁盘）
"""

from typing import Iterable, List, Optional

from api.linode.models import Instance
from collector.base import ResourceCollector
from collector.descriptor import MIB, MetricDescriptor, Sample

INSTANCE_LABELS = ('linode_id', 'label', 'region', 'type')

RUNNING = 'running'


class InstanceCollector(ResourceCollector):
    """实例 Collector，只需一次列表调用，不获取详情"""

    name = 'instance'
    subsystem = 'instance'

    def _build_descriptors(self) -> Iterable[MetricDescriptor]:
        self.up = self._new_desc('up', 'Whether the Linode is running (1) or not (0)', INSTANCE_LABELS)
        self.vcpus = self._new_desc('vcpus', 'Number of virtual CPUs', INSTANCE_LABELS)
        self.memory_bytes = self._new_desc('memory_bytes', 'Memory of the Linode in bytes', INSTANCE_LABELS)
        self.disk_bytes = self._new_desc('disk_bytes', 'Disk space of the Linode in bytes', INSTANCE_LABELS)
        return [self.up, self.vcpus, self.memory_bytes, self.disk_bytes]

    def _list_resources(self, timeout: Optional[float]) -> List[Instance]:
        return self.client.list_instances(timeout=timeout)

    def _samples_for(self, resource: Instance, detail: Instance) -> Iterable[Sample]:
        label_values = (str(resource.id), resource.label, resource.region, resource.type)
        yield self.up.sample(1.0 if resource.status == RUNNING else 0.0, label_values)
        yield self.vcpus.sample(resource.vcpus, label_values)
        # specs 中内存和磁盘单位是 MB
        yield self.memory_bytes.sample(resource.memory_mb * MIB, label_values)
        yield self.disk_bytes.sample(resource.disk_mb * MIB, label_values)
