# -*- coding: utf-8 -*-
"""测试共享 fixture"""

import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from prometheus_client import CollectorRegistry

# 把项目根目录加入 Python 路径
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from api.linode import (  # noqa: E402
    Account, Instance, InstanceTransfer, LinodeAPIError, NodeBalancer, Ticket
)
from collector.scrape_stats import ScrapeStats  # noqa: E402


class FakeLinodeClient:
    """
    内存中的 Linode 客户端

    list_error / transfer_errors 用于模拟列表失败和单个资源详情失败
    """

    def __init__(
        self,
        instances: Optional[List[Instance]] = None,
        transfers: Optional[Dict[int, InstanceTransfer]] = None,
        account: Optional[Account] = None,
        nodebalancers: Optional[List[NodeBalancer]] = None,
        tickets: Optional[List[Ticket]] = None,
    ):
        self.instances = instances or []
        self.transfers = transfers or {}
        self.account = account
        self.nodebalancers = nodebalancers or []
        self.tickets = tickets or []
        self.list_error: Optional[LinodeAPIError] = None
        self.transfer_errors: Dict[int, LinodeAPIError] = {}
        self.calls: List[tuple] = []

    def list_instances(self, timeout=None):
        self.calls.append(('list_instances', timeout))
        if self.list_error:
            raise self.list_error
        return list(self.instances)

    def get_instance_transfer(self, linode_id, timeout=None):
        self.calls.append(('get_instance_transfer', linode_id, timeout))
        if linode_id in self.transfer_errors:
            raise self.transfer_errors[linode_id]
        return self.transfers[linode_id]

    def get_account(self, timeout=None):
        self.calls.append(('get_account', timeout))
        if self.list_error:
            raise self.list_error
        return self.account

    def list_nodebalancers(self, timeout=None):
        self.calls.append(('list_nodebalancers', timeout))
        if self.list_error:
            raise self.list_error
        return list(self.nodebalancers)

    def list_tickets(self, timeout=None):
        self.calls.append(('list_tickets', timeout))
        if self.list_error:
            raise self.list_error
        return list(self.tickets)


@pytest.fixture
def two_instance_client():
    """两个实例：web-1 (quota=2 GiB) 和 web-2 (quota=4 GiB)"""
    return FakeLinodeClient(
        instances=[
            Instance(id=100, label='web-1', region='us-east', type='g6-nanode-1', status='running',
                     vcpus=1, memory_mb=1024, disk_mb=25600),
            Instance(id=101, label='web-2', region='us-east', type='g6-standard-2', status='offline',
                     vcpus=2, memory_mb=4096, disk_mb=81920),
        ],
        transfers={
            100: InstanceTransfer(used=5e9, quota=2, billable=0),
            101: InstanceTransfer(used=3e12, quota=4, billable=1e9),
        },
        account=Account(balance=12.5, balance_uninvoiced=3.25, company='Acme', email='ops@example.com'),
        nodebalancers=[
            NodeBalancer(id=7, label='lb-1', region='us-east',
                         transfer_in_mb=10, transfer_out_mb=20, transfer_total_mb=30),
        ],
        tickets=[
            Ticket(id=1, status='open'),
            Ticket(id=2, status='closed'),
            Ticket(id=3, status='open'),
        ],
    )


@pytest.fixture
def stats_registry():
    return CollectorRegistry()


@pytest.fixture
def stats(stats_registry):
    return ScrapeStats('linode', registry=stats_registry)
