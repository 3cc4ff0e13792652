# -*- coding: utf-8 -*-
"""
Linode API 客户端模块

功能：
- 封装 Linode API v4 调用（实例、实例流量、账号、NodeBalancer、工单）
- 自动处理分页
- 所有失败统一转换为 LinodeAPIError，调用方只需处理一种异常
"""

import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx

from api.linode.models import Account, Instance, InstanceTransfer, NodeBalancer, Ticket

logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'https://api.linode.com/v4'
USER_AGENT = 'linode-exporter'

T = TypeVar('T')


class LinodeAPIError(Exception):
    """Linode API 调用失败（网络错误、非 2xx 响应、响应格式错误）"""

    def __init__(self, message: str, status_code: Optional[int] = None, path: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.path = path


class LinodeClient:
    """
    Linode API 客户端

    功能：
    - 使用 Bearer Token 访问 Linode API
    - list_* 方法遍历全部分页，不做过滤
    - 每次调用可传入 timeout，用于把抓取截止时间传递到 HTTP 层
    - 不做重试和缓存，每次调用都是一次新的请求
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        request_timeout: float = 10.0,
        page_size: int = 100,
        debug: bool = False,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        初始化 Linode 客户端

        Args:
            token: Linode API Token
            api_url: API 根地址
            request_timeout: 单次请求超时（秒），也是 timeout 参数的上限
            page_size: 分页大小（Linode 允许 25-500）
            debug: 是否记录每个请求和响应
            transport: 自定义 httpx transport（测试时注入 MockTransport）
        """
        self.api_url = api_url.rstrip('/')
        self.request_timeout = request_timeout
        self.page_size = page_size

        event_hooks = {}
        if debug:
            event_hooks = {'request': [self._log_request], 'response': [self._log_response]}

        self._client = httpx.Client(
            base_url=self.api_url,
            headers={
                'Authorization': f'Bearer {token}',
                'Accept': 'application/json',
                'User-Agent': USER_AGENT,
            },
            timeout=request_timeout,
            transport=transport,
            event_hooks=event_hooks,
        )
        logger.debug(f"Linode 客户端初始化成功: {self.api_url}")

    def __enter__(self) -> 'LinodeClient':
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        """关闭连接池"""
        self._client.close()

    def list_instances(self, timeout: Optional[float] = None) -> List[Instance]:
        """
        列出账号下全部 Linode 实例

        Returns:
            Instance 列表，顺序与 API 返回一致
        """
        return self._list('/linode/instances', Instance.from_dict, timeout)

    def get_instance_transfer(self, linode_id: int, timeout: Optional[float] = None) -> InstanceTransfer:
        """
        获取单个实例的当月流量

        Args:
            linode_id: Linode ID

        Returns:
            InstanceTransfer（used/billable 单位 bytes，quota 单位 GiB）
        """
        return self._get(f'/linode/instances/{linode_id}/transfer', InstanceTransfer.from_dict, timeout)

    def get_account(self, timeout: Optional[float] = None) -> Account:
        """获取账号信息"""
        return self._get('/account', Account.from_dict, timeout)

    def list_nodebalancers(self, timeout: Optional[float] = None) -> List[NodeBalancer]:
        """列出全部 NodeBalancer"""
        return self._list('/nodebalancers', NodeBalancer.from_dict, timeout)

    def list_tickets(self, timeout: Optional[float] = None) -> List[Ticket]:
        """列出全部支持工单"""
        return self._list('/support/tickets', Ticket.from_dict, timeout)

    def _get(self, path: str, parse: Callable[[Dict[str, Any]], T], timeout: Optional[float]) -> T:
        data = self._request(path, None, timeout)
        return self._parse(path, parse, data)

    def _list(self, path: str, parse: Callable[[Dict[str, Any]], T], timeout: Optional[float]) -> List[T]:
        """
        遍历分页获取全部条目

        Linode 分页响应格式: {"data": [...], "page": 1, "pages": 3, "results": 250}
        """
        items: List[T] = []
        page = 1
        while True:
            body = self._request(path, {'page': page, 'page_size': self.page_size}, timeout)
            if not isinstance(body, dict) or not isinstance(body.get('data'), list):
                raise LinodeAPIError(f"分页响应格式错误: {path}", path=path)

            for entry in body['data']:
                items.append(self._parse(path, parse, entry))

            try:
                pages = int(body.get('pages') or 1)
            except (TypeError, ValueError) as e:
                raise LinodeAPIError(f"分页响应格式错误: {path} pages={body.get('pages')!r}", path=path) from e
            if page >= pages:
                break
            page += 1

        logger.debug(f"获取到 {len(items)} 个条目: {path}")
        return items

    def _request(self, path: str, params: Optional[Dict[str, Any]], timeout: Optional[float]) -> Any:
        try:
            response = self._client.get(path, params=params, timeout=self._effective_timeout(timeout))
        except httpx.TimeoutException as e:
            raise LinodeAPIError(f"GET {path} 超时: {e}", path=path) from e
        except httpx.HTTPError as e:
            raise LinodeAPIError(f"GET {path} 请求失败: {e}", path=path) from e

        if response.is_error:
            raise LinodeAPIError(
                f"GET {path} 返回 {response.status_code}: {self._error_reason(response)}",
                status_code=response.status_code,
                path=path
            )

        try:
            return response.json()
        except ValueError as e:
            raise LinodeAPIError(f"GET {path} 响应不是合法 JSON: {e}",
                                 status_code=response.status_code, path=path) from e

    def _effective_timeout(self, timeout: Optional[float]) -> float:
        if timeout is None:
            return self.request_timeout
        return max(0.0, min(timeout, self.request_timeout))

    @staticmethod
    def _parse(path: str, parse: Callable[[Dict[str, Any]], T], data: Any) -> T:
        if not isinstance(data, dict):
            raise LinodeAPIError(f"解析 {path} 响应失败: 条目不是对象 {data!r}", path=path)
        try:
            return parse(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise LinodeAPIError(f"解析 {path} 响应失败: {e!r}", path=path) from e

    @staticmethod
    def _error_reason(response: httpx.Response) -> str:
        """提取 Linode 错误响应中的 reason: {"errors": [{"reason": "..."}]}"""
        try:
            errors = response.json().get('errors') or []
            reasons = [err.get('reason', '') for err in errors if isinstance(err, dict)]
            if reasons:
                return '; '.join(reasons)
        except (ValueError, AttributeError):
            pass
        return response.reason_phrase or 'unknown error'

    @staticmethod
    def _log_request(request: httpx.Request):
        logger.debug(f"[LinodeClient] --> {request.method} {request.url}")

    @staticmethod
    def _log_response(response: httpx.Response):
        request = response.request
        logger.debug(f"[LinodeClient] <-- {response.status_code} {request.method} {request.url}")
