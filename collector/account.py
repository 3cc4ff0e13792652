# -*- coding: utf-8 -*-
"""
账号 Collector

功能：
- 获取账号余额和未出账金额（USD）
"""

from typing import Iterable, List, Optional

from api.linode.models import Account
from collector.base import ResourceCollector
from collector.descriptor import MetricDescriptor, Sample


class AccountCollector(ResourceCollector):
    """账号 Collector，账号只有一个，list 结果固定为单元素列表"""

    name = 'account'
    subsystem = 'account'

    def _build_descriptors(self) -> Iterable[MetricDescriptor]:
        self.balance = self._new_desc('balance', 'Balance of account', ['company'])
        self.uninvoiced = self._new_desc('uninvoiced', 'Uninvoiced balance of account', ['company'])
        return [self.balance, self.uninvoiced]

    def _list_resources(self, timeout: Optional[float]) -> List[Account]:
        return [self.client.get_account(timeout=timeout)]

    def _resource_key(self, resource: Account) -> str:
        return resource.company or 'account'

    def _samples_for(self, resource: Account, detail: Account) -> Iterable[Sample]:
        label_values = (resource.company,)
        yield self.balance.sample(resource.balance, label_values)
        yield self.uninvoiced.sample(resource.balance_uninvoiced, label_values)
