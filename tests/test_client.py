# -*- coding: utf-8 -*-
"""LinodeClient 测试（使用 httpx.MockTransport，不访问网络）"""

import httpx
import pytest

from api.linode import Instance, LinodeAPIError, LinodeClient


def _instance(linode_id, label):
    return {
        'id': linode_id,
        'label': label,
        'region': 'us-east',
        'type': 'g6-nanode-1',
        'status': 'running',
        'specs': {'vcpus': 1, 'memory': 1024, 'disk': 25600},
    }


def _client(handler, **kwargs):
    return LinodeClient('secret-token', transport=httpx.MockTransport(handler), **kwargs)


class TestLinodeClient:

    def test_list_instances_follows_pagination(self):
        requests = []

        def handler(request):
            requests.append(request)
            page = int(request.url.params['page'])
            data = [_instance(100, 'web-1')] if page == 1 else [_instance(101, 'web-2')]
            return httpx.Response(200, json={'data': data, 'page': page, 'pages': 2, 'results': 2})

        with _client(handler, page_size=25) as client:
            instances = client.list_instances()

        assert [i.id for i in instances] == [100, 101]
        assert instances[0] == Instance(id=100, label='web-1', region='us-east', type='g6-nanode-1',
                                        status='running', vcpus=1, memory_mb=1024, disk_mb=25600)
        assert [r.url.path for r in requests] == ['/v4/linode/instances'] * 2
        assert requests[0].url.params['page_size'] == '25'
        assert requests[0].headers['Authorization'] == 'Bearer secret-token'

    def test_get_instance_transfer(self):
        def handler(request):
            assert request.url.path == '/v4/linode/instances/100/transfer'
            return httpx.Response(200, json={'used': 22956600198, 'quota': 2000, 'billable': 0})

        with _client(handler) as client:
            transfer = client.get_instance_transfer(100)

        assert transfer.used == 22956600198
        assert transfer.quota == 2000
        assert transfer.billable == 0

    def test_get_account(self):
        def handler(request):
            return httpx.Response(200, json={'balance': 1.5, 'balance_uninvoiced': 0.75, 'company': 'Acme'})

        with _client(handler) as client:
            account = client.get_account()

        assert account.balance == 1.5
        assert account.company == 'Acme'
        assert account.email == ''

    def test_list_tickets_and_nodebalancers(self):
        def handler(request):
            if request.url.path.endswith('/support/tickets'):
                return httpx.Response(200, json={'data': [{'id': 1, 'status': 'open', 'summary': 'hi'}],
                                                 'page': 1, 'pages': 1})
            return httpx.Response(200, json={'data': [{'id': 7, 'label': 'lb', 'region': 'us-east',
                                                       'transfer': {'in': 1.5, 'out': 2, 'total': 3.5}}],
                                             'page': 1, 'pages': 1})

        with _client(handler) as client:
            tickets = client.list_tickets()
            nodebalancers = client.list_nodebalancers()

        assert tickets[0].status == 'open'
        assert nodebalancers[0].transfer_total_mb == 3.5

    def test_error_status_raises_with_reason(self):
        def handler(request):
            return httpx.Response(401, json={'errors': [{'reason': 'Invalid Token'}]})

        with _client(handler) as client:
            with pytest.raises(LinodeAPIError) as excinfo:
                client.list_instances()

        assert excinfo.value.status_code == 401
        assert excinfo.value.path == '/linode/instances'
        assert 'Invalid Token' in str(excinfo.value)

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError('connection refused', request=request)

        with _client(handler) as client:
            with pytest.raises(LinodeAPIError) as excinfo:
                client.get_instance_transfer(1)

        assert excinfo.value.status_code is None

    def test_timeout_raises(self):
        def handler(request):
            raise httpx.ReadTimeout('timed out', request=request)

        with _client(handler) as client:
            with pytest.raises(LinodeAPIError):
                client.get_account(timeout=1.0)

    def test_malformed_body_raises(self):
        def handler(request):
            return httpx.Response(200, json={'used': 1})

        with _client(handler) as client:
            with pytest.raises(LinodeAPIError):
                client.get_instance_transfer(1)

    @pytest.mark.parametrize('entry', [None, 'web-1', 42, ['web-1']])
    def test_non_object_list_entry_raises(self, entry):
        def handler(request):
            return httpx.Response(200, json={'data': [entry], 'page': 1, 'pages': 1})

        with _client(handler) as client:
            with pytest.raises(LinodeAPIError) as excinfo:
                client.list_instances()

        assert excinfo.value.path == '/linode/instances'

    def test_non_object_specs_raises(self):
        entry = dict(_instance(100, 'web-1'), specs=[1])

        def handler(request):
            return httpx.Response(200, json={'data': [entry], 'page': 1, 'pages': 1})

        with _client(handler) as client:
            with pytest.raises(LinodeAPIError):
                client.list_instances()

    @pytest.mark.parametrize('transfer', [[1, 2, 3], 'lots'])
    def test_non_object_nodebalancer_transfer_raises(self, transfer):
        entry = {'id': 7, 'label': 'lb-1', 'region': 'us-east', 'transfer': transfer}

        def handler(request):
            return httpx.Response(200, json={'data': [entry], 'page': 1, 'pages': 1})

        with _client(handler) as client:
            with pytest.raises(LinodeAPIError):
                client.list_nodebalancers()

    @pytest.mark.parametrize('pages', ['many', [2], {'n': 2}])
    def test_non_integer_pages_raises(self, pages):
        def handler(request):
            return httpx.Response(200, json={'data': [_instance(100, 'web-1')], 'page': 1, 'pages': pages})

        with _client(handler) as client:
            with pytest.raises(LinodeAPIError):
                client.list_instances()

    def test_numeric_string_pages_is_accepted(self):
        def handler(request):
            return httpx.Response(200, json={'data': [_instance(100, 'web-1')], 'page': 1, 'pages': '1'})

        with _client(handler) as client:
            assert [i.id for i in client.list_instances()] == [100]

    def test_non_object_single_resource_raises(self):
        def handler(request):
            return httpx.Response(200, json=[1, 2, 3])

        with _client(handler) as client:
            with pytest.raises(LinodeAPIError):
                client.get_account()

    def test_non_json_body_raises(self):
        def handler(request):
            return httpx.Response(200, text='<html>maintenance</html>')

        with _client(handler) as client:
            with pytest.raises(LinodeAPIError):
                client.get_account()

    def test_timeout_is_capped_by_request_timeout(self):
        with _client(lambda request: httpx.Response(200, json={})) as client:
            assert client._effective_timeout(None) == 10.0
            assert client._effective_timeout(3.0) == 3.0
            assert client._effective_timeout(60.0) == 10.0
