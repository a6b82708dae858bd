"""
Main entry point for the Quote API.
Provides command-line interface and service initialization.
"""

import asyncio
import argparse
import json
import sys
from typing import Optional, List

import uvicorn

from api.app import build_selector, create_app
from quotes import QuoteSelector
from utils import (
    ConfigurationError,
    api_logger,
    get_config_manager,
    initialize_logging,
    main_logger,
)


class QuoteService:
    """语录服务主类"""

    def __init__(self, config=None):
        self.config = config or get_config_manager()
        self.selector: Optional[QuoteSelector] = None

    def initialize(self) -> QuoteSelector:
        """初始化服务，目录无效时抛出异常，进程不会开始监听"""
        main_logger.info("[Main] Initializing Quote API...")
        self.selector = build_selector(self.config)
        main_logger.info("[Main] Quote API initialized successfully")
        return self.selector

    def resolve_bind(self, host: Optional[str] = None, port: Optional[int] = None):
        """命令行参数优先于环境变量和配置文件"""
        api_config = self.config.get_api_config()
        final_host = host if host is not None else api_config.host
        final_port = port if port is not None else api_config.port
        return final_host, final_port

    async def start_api_server(self, host: Optional[str] = None, port: Optional[int] = None):
        """启动API服务器（单进程）"""
        final_host, final_port = self.resolve_bind(host, port)
        app = create_app(selector=self.selector or self.initialize(), config=self.config)

        api_logger.info(f"[Main] Starting API server on {final_host}:{final_port}...")

        config = uvicorn.Config(
            app,
            host=final_host,
            port=final_port,
            log_level="info"
        )
        server = uvicorn.Server(config)

        # uvicorn 处理 SIGINT/SIGTERM 并优雅关闭
        await server.serve()

    def start_api_workers(self, workers: int, host: Optional[str] = None, port: Optional[int] = None):
        """以多进程方式启动API服务器，每个进程独立播种"""
        final_host, final_port = self.resolve_bind(host, port)
        api_logger.info(f"[Main] Starting API server on {final_host}:{final_port} with {workers} workers...")

        uvicorn.run(
            "api.app:app_factory",
            factory=True,
            host=final_host,
            port=final_port,
            workers=workers,
            log_level="info"
        )

    def show_quotes(self):
        """显示当前语录目录"""
        selector = self.selector or self.initialize()
        for number, quote in enumerate(selector.catalog, start=1):
            print(f"{number:>3}. {quote}")

    def show_config(self):
        """显示合并后的配置"""
        print(json.dumps(self.config.to_dict(), indent=2, ensure_ascii=False))


def positive_int(value: str) -> int:
    """argparse 类型：正整数"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def create_parser():
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        description="Quote API - 随机语录 JSON 服务",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  python main.py serve                           # 使用配置文件启动服务 (默认 0.0.0.0:8080)
  python main.py serve --host 127.0.0.1 --port 9000  # 指定监听地址和端口
  python main.py serve --workers 4               # 多进程启动
  python main.py quotes                          # 显示语录目录
  python main.py config                          # 显示合并后的配置
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    serve_parser = subparsers.add_parser('serve', help='启动API服务器')
    serve_parser.add_argument('--host', default=None, help='监听地址 (默认: 配置文件中的 api_config.host)')
    serve_parser.add_argument('--port', type=int, default=None, help='监听端口 (默认: 配置文件中的 api_config.port)')
    serve_parser.add_argument('--workers', type=positive_int, default=None, help='工作进程数 (默认: 配置文件中的 api_config.workers)')

    subparsers.add_parser('quotes', help='显示语录目录')
    subparsers.add_parser('config', help='显示合并后的配置')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        initialize_logging()
        service = QuoteService()

        if args.command == 'serve':
            workers = args.workers if args.workers is not None else service.config.get_api_config().workers
            # 启动前校验目录，失败时不绑定端口
            service.initialize()
            if workers > 1:
                service.start_api_workers(workers, args.host, args.port)
            else:
                asyncio.run(service.start_api_server(args.host, args.port))

        elif args.command == 'quotes':
            service.show_quotes()

        elif args.command == 'config':
            service.show_config()

    except ConfigurationError as e:
        main_logger.error(f"[Main] Configuration error: {e}")
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        main_logger.info("[Main] Received keyboard interrupt")

    return 0


if __name__ == "__main__":
    sys.exit(main())
