# -*- coding: utf-8 -*-
"""
Exporter 自身信息 Collector

功能：
- 输出构建信息（OS 版本、Git Commit、Python 版本）
- 输出进程启动时间
- 不访问上游 API
"""

import platform
import time
from typing import Any, Iterable, List, Optional

from collector.base import DEFAULT_NAMESPACE, ResourceCollector
from collector.descriptor import MetricDescriptor, Sample


class ExporterCollector(ResourceCollector):

    name = 'exporter'
    subsystem = 'exporter'

    def __init__(
        self,
        client: Any = None,
        namespace: str = DEFAULT_NAMESPACE,
        os_version: str = '',
        git_commit: str = '',
        start_time: Optional[float] = None,
        **kwargs
    ):
        """
        初始化 Exporter Collector

        Args:
            client: 不使用，保持与其他 Collector 相同的构造方式
            os_version: 构建所在 OS 版本，默认取当前平台
            git_commit: 构建对应的 Git Commit
            start_time: 进程启动时间（unix 秒），默认取构造时间
        """
        self.os_version = os_version or platform.platform()
        self.git_commit = git_commit or 'unknown'
        self.start_time = start_time if start_time is not None else time.time()
        super().__init__(client, namespace=namespace, **kwargs)

    def _build_descriptors(self) -> Iterable[MetricDescriptor]:
        self.build_info = self._new_desc(
            'build_info',
            'A metric with a constant 1 value labeled by OS version, Git commit and Python version',
            ['os_version', 'git_commit', 'python_version']
        )
        self.start_time_seconds = self._new_desc(
            'start_time_seconds',
            'Start time of the exporter since unix epoch in seconds'
        )
        return [self.build_info, self.start_time_seconds]

    def _list_resources(self, timeout: Optional[float]) -> List[str]:
        return [self.name]

    def _samples_for(self, resource: str, detail: str) -> Iterable[Sample]:
        yield self.build_info.sample(1, [self.os_version, self.git_commit, platform.python_version()])
        yield self.start_time_seconds.sample(self.start_time, [])
