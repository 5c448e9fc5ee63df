"""
Main entry point for the Quote Server.
Provides command-line interface and server startup.
"""

import asyncio
import argparse
import socket
import sys
from typing import Optional

import uvicorn

from utils import (
    server_logger, config_manager, initialize_logging,
    UnifiedConfigManager, QuoteStoreError, ServerStartupError, ErrorCodes
)
from api.app import create_app, load_quote_store


def bind_socket(host: str, port: int) -> socket.socket:
    """绑定监听端口，端口不可用时抛出 ServerStartupError"""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

    try:
        sock.bind((host, port))
    except OSError as e:
        sock.close()
        raise ServerStartupError(
            f"Failed to bind {host}:{port}: {e}",
            ErrorCodes.SERVER_BIND_FAILED,
            context={"host": host, "port": port}
        ) from e

    sock.set_inheritable(True)
    return sock


class UvicornServer(uvicorn.Server):
    """生命周期启动成功后才记录服务已启动"""

    async def startup(self, sockets=None):
        try:
            await super().startup(sockets=sockets)
        except SystemExit as e:
            # 较新的 uvicorn 在生命周期启动失败时直接 sys.exit
            raise ServerStartupError(
                "Application startup failed",
                ErrorCodes.SERVER_STARTUP_FAILED,
                context={"port": self.config.port}
            ) from e

        if self.started:
            server_logger.info(f"[Main] Started server on port {self.config.port}")


class QuoteServer:
    """名言服务主类"""

    def __init__(self, config: Optional[UnifiedConfigManager] = None):
        self.config = config or config_manager
        self.server: Optional[uvicorn.Server] = None
        self.host: Optional[str] = None
        self.port: Optional[int] = None

    async def start_server(self, host: str = None, port: int = None, workers: int = None):
        """启动HTTP服务器"""
        server_config = self.config.get_server_config()

        # 使用配置文件的值，如果命令行参数未提供
        final_host = host if host is not None else server_config.host
        final_port = port if port is not None else server_config.port
        final_workers = workers if workers is not None else server_config.workers

        try:
            sock = bind_socket(final_host, final_port)
        except ServerStartupError as e:
            server_logger.error(f"[Main] {e}")
            raise

        self.host = final_host
        self.port = sock.getsockname()[1]

        try:
            # 与端口一样在开始监听前加载名言列表
            try:
                quote_store = load_quote_store(self.config)
            except QuoteStoreError as e:
                server_logger.error(f"[Main] {e}")
                raise ServerStartupError(
                    f"Failed to load quotes: {e.message}",
                    ErrorCodes.SERVER_STARTUP_FAILED,
                    context=e.context
                ) from e

            app = create_app(quote_store=quote_store, workers=final_workers, config=self.config)
            uv_config = uvicorn.Config(
                app,
                host=final_host,
                port=self.port,
                timeout_keep_alive=server_config.timeout_keep_alive,
                log_level=server_config.log_level,
                log_config=None
            )
            self.server = UvicornServer(uv_config)

            await self.server.serve(sockets=[sock])

            if not self.server.started:
                raise ServerStartupError(
                    "Application startup failed",
                    ErrorCodes.SERVER_STARTUP_FAILED,
                    context={"port": self.port}
                )
        finally:
            sock.close()
            server_logger.info("[Main] Server stopped")

    def stop(self):
        """通知服务器退出"""
        if self.server is not None:
            self.server.should_exit = True


def create_parser():
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        description="Quote Server - 随机名言与主机名展示服务",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  python main.py                              # 使用配置文件启动
  python main.py --port 8081                  # 指定监听端口
  python main.py --host 127.0.0.1 --workers 4  # 指定监听地址和工作线程数
        """
    )
    parser.add_argument('--host', default=None, help='监听地址 (默认: 配置文件)')
    parser.add_argument('--port', type=int, default=None, help='监听端口 (默认: 配置文件)')
    parser.add_argument('--workers', type=int, default=None, help='工作线程数 (默认: 配置文件)')
    parser.add_argument('--config-dir', default=None, help='配置目录 (默认: config/)')
    return parser


async def main(argv=None):
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    config = UnifiedConfigManager(args.config_dir) if args.config_dir else config_manager
    initialize_logging(config=config)

    system = QuoteServer(config)
    try:
        await system.start_server(host=args.host, port=args.port, workers=args.workers)
    except ServerStartupError:
        server_logger.error("[Main] Server did not start")
        sys.exit(1)
    except KeyboardInterrupt:
        server_logger.info("[Main] Received keyboard interrupt")


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
