# -*- coding: utf-8 -*-
"""HTTP 端点和启动流程测试"""

import pytest
from prometheus_client import CONTENT_TYPE_LATEST

import main
from collector import build_registry
from config import ExporterConfig


@pytest.fixture
def app(two_instance_client):
    config = ExporterConfig(linode_token='t', collectors=['transfer', 'exporter'])
    registry, collectors = build_registry(two_instance_client, config)
    return main.create_app(registry, [c.name for c in collectors], '/metrics')


class TestEndpoints:

    def test_metrics(self, app):
        response = app.test_client().get('/metrics')

        assert response.status_code == 200
        assert response.headers['Content-Type'] == CONTENT_TYPE_LATEST
        body = response.get_data(as_text=True)
        assert 'linode_transfer_quota_bytes{label="web-1",linode_id="100",region="us-east"} 2.147483648e+09' in body
        assert 'linode_exporter_build_info{' in body

    def test_root_links_metrics_path(self):
        app = main.create_app(None, [], '/probe')

        response = app.test_client().get('/')

        assert response.status_code == 200
        assert 'href="/probe"' in response.get_data(as_text=True)

    def test_not_initialized(self):
        app = main.create_app(None)

        response = app.test_client().get('/metrics')

        assert response.get_data(as_text=True) == '# Exporter not initialized\n'

    def test_health(self, app):
        response = app.test_client().get('/health')

        assert response.status_code == 200
        assert response.get_json() == {'status': 'healthy', 'collectors': ['transfer', 'exporter']}


class TestMain:

    def test_missing_token_exits(self, monkeypatch):
        monkeypatch.delenv('LINODE_TOKEN', raising=False)
        monkeypatch.delenv('EXPORTER_CONFIG', raising=False)

        with pytest.raises(SystemExit) as excinfo:
            main.main([])

        assert excinfo.value.code == 1

    def test_parse_args_leaves_unset_flags_empty(self):
        args = main.parse_args(['--linode_token', 'abc', '--path', '/m'])

        assert args.linode_token == 'abc'
        assert args.metrics_path == '/m'
        assert args.debug is None
        assert args.endpoint is None
