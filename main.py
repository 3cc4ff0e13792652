#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Linode Exporter 主程序入口

功能：
- 加载配置，缺少 Linode API Token 时直接退出
- 创建 Linode 客户端并注册全部 Collector
- 启动 Flask HTTP 服务器
- 暴露 metrics 端点供 Prometheus 抓取（每次抓取实时访问 Linode API）
- 暴露 /health 健康检查端点
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from flask import Flask, jsonify
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from api.linode import LinodeClient
from collector import build_registry
from config import ConfigError, load_config, validate_config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def create_app(
    registry: Optional[CollectorRegistry],
    collector_names: Sequence[str] = (),
    metrics_path: str = '/metrics'
) -> Flask:
    """
    创建 Flask 应用

    Args:
        registry: 已注册 Collector 的 registry；为 None 时 metrics 端点返回未初始化提示
        collector_names: 已启用的 Collector 名称（用于 /health）
        metrics_path: 指标路径

    Returns:
        Flask 应用
    """
    app = Flask(__name__)

    @app.route('/')
    def root():
        """首页，链接到 metrics 端点"""
        body = f'<h2>Linode Exporter</h2><a href="{metrics_path}">metrics</a>'
        return body, 200, {'Content-Type': 'text/html; charset=UTF-8'}

    def metrics():
        """
        Prometheus metrics 端点

        每次请求都会调用全部 Collector 的 collect()，单个 Collector 失败不影响其他 Collector
        """
        if registry is None:
            return "# Exporter not initialized\n", 200, {'Content-Type': CONTENT_TYPE_LATEST}

        return generate_latest(registry), 200, {'Content-Type': CONTENT_TYPE_LATEST}

    app.add_url_rule(metrics_path, 'metrics', metrics)

    @app.route('/health')
    def health():
        """健康检查端点"""
        return jsonify({
            'status': 'healthy',
            'collectors': list(collector_names),
        }), 200

    return app


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """解析命令行参数（未指定的参数为 None，不覆盖配置文件和环境变量）"""
    parser = argparse.ArgumentParser(description='Prometheus exporter for Linode')
    parser.add_argument('--config', default=None, help='YAML config file')
    parser.add_argument('--linode_token', default=None, help='Linode API Token')
    parser.add_argument('--debug', action='store_const', const=True, default=None,
                        help='Enable Linode REST API debugging')
    parser.add_argument('--endpoint', default=None, help='The endpoint of the HTTP server')
    parser.add_argument('--path', dest='metrics_path', default=None,
                        help='The path on which Prometheus metrics will be served')
    parser.add_argument('--log-level', dest='log_level', default=None, help='Log level')
    return parser.parse_args(argv)


def setup_logging(level: str, debug: bool = False):
    """配置日志"""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())

    # 减少 Flask 和 HTTP 客户端日志
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    if debug:
        logging.getLogger('api.linode').setLevel(logging.DEBUG)
    else:
        logging.getLogger('httpx').setLevel(logging.WARNING)
        logging.getLogger('httpcore').setLevel(logging.WARNING)


def main(argv: Optional[List[str]] = None):
    """主函数"""
    args = parse_args(argv)
    setup_logging('INFO')

    try:
        config = load_config(args.config, overrides={
            'linode_token': args.linode_token,
            'debug': args.debug,
            'endpoint': args.endpoint,
            'metrics_path': args.metrics_path,
            'log_level': args.log_level,
        })
    except FileNotFoundError as e:
        logger.error(f"配置文件不存在: {e}")
        sys.exit(1)
    except ConfigError as e:
        logger.error(f"加载配置失败: {e}")
        sys.exit(1)

    is_valid, error_message = validate_config(config)
    if not is_valid:
        logger.error(f"配置无效: {error_message}")
        sys.exit(1)

    setup_logging(config.log_level, debug=config.debug)

    logger.info("=" * 60)
    logger.info("初始化 Linode Exporter")
    logger.info("=" * 60)
    logger.info(f"API: {config.api_url}")
    logger.info(f"Collectors: {', '.join(config.collectors)}")
    logger.info(f"scrape_timeout: {config.scrape_timeout}s, request_timeout: {config.request_timeout}s")

    client = LinodeClient(
        token=config.linode_token,
        api_url=config.api_url,
        request_timeout=config.request_timeout,
        page_size=config.page_size,
        debug=config.debug
    )

    try:
        registry, collectors = build_registry(client, config)
        app = create_app(registry, [c.name for c in collectors], config.metrics_path)

        logger.info(f"[main] Server starting ({config.endpoint})")
        logger.info(f"[main] metrics served on: {config.metrics_path}")
        app.run(host=config.host, port=config.port, debug=False, threaded=True)
    finally:
        client.close()


if __name__ == '__main__':
    main()
