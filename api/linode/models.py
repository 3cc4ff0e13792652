# -*- coding: utf-8 -*-
"""
Linode API 数据结构

功能：
- 定义 Linode API v4 响应的标准化数据结构
- 只保留指标计算需要的字段
- 单位与 API 保持一致，换算由 Collector 负责
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Instance:
    """Linode 实例（list 调用返回的单个资源）"""
    id: int                  # Linode ID
    label: str               # 显示名称
    region: str              # 区域，如 "us-east"
    type: str = ""           # 规格，如 "g6-standard-1"
    status: str = ""         # 状态，如 "running", "offline"
    vcpus: int = 0
    memory_mb: int = 0       # MB
    disk_mb: int = 0         # MB

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Instance':
        specs = data.get('specs') or {}
        return cls(
            id=int(data['id']),
            label=str(data['label']),
            region=str(data['region']),
            type=str(data.get('type') or ''),
            status=str(data.get('status') or ''),
            vcpus=int(specs.get('vcpus') or 0),
            memory_mb=int(specs.get('memory') or 0),
            disk_mb=int(specs.get('disk') or 0),
        )


@dataclass(frozen=True)
class InstanceTransfer:
    """
    实例当月流量

    used 和 billable 的单位是 bytes，quota 的单位是 GiB
    """
    used: float
    quota: float
    billable: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InstanceTransfer':
        return cls(
            used=float(data['used']),
            quota=float(data['quota']),
            billable=float(data['billable']),
        )


@dataclass(frozen=True)
class Account:
    """账号余额信息（USD）"""
    balance: float
    balance_uninvoiced: float
    company: str = ""
    email: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Account':
        return cls(
            balance=float(data['balance']),
            balance_uninvoiced=float(data['balance_uninvoiced']),
            company=str(data.get('company') or ''),
            email=str(data.get('email') or ''),
        )


@dataclass(frozen=True)
class NodeBalancer:
    """NodeBalancer 及其当月流量（MB）"""
    id: int
    label: str
    region: str
    transfer_in_mb: float = 0.0
    transfer_out_mb: float = 0.0
    transfer_total_mb: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'NodeBalancer':
        transfer = data.get('transfer') or {}
        return cls(
            id=int(data['id']),
            label=str(data['label']),
            region=str(data['region']),
            # 新建的 NodeBalancer 流量字段为 null
            transfer_in_mb=float(transfer.get('in') or 0.0),
            transfer_out_mb=float(transfer.get('out') or 0.0),
            transfer_total_mb=float(transfer.get('total') or 0.0),
        )


@dataclass(frozen=True)
class Ticket:
    """支持工单"""
    id: int
    status: str
    summary: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Ticket':
        return cls(
            id=int(data['id']),
            status=str(data['status']),
            summary=data.get('summary'),
        )
