# -*- coding: utf-8 -*-
"""
Linode API 客户端模块

功能：
- 封装 Linode API v4 调用
- 返回标准化的数据结构供 Collector 使用
"""

from .client import LinodeClient, LinodeAPIError, DEFAULT_API_URL
from .models import Account, Instance, InstanceTransfer, NodeBalancer, Ticket

__all__ = [
    'LinodeClient',
    'LinodeAPIError',
    'DEFAULT_API_URL',
    'Account',
    'Instance',
    'InstanceTransfer',
    'NodeBalancer',
    'Ticket',
]
