import socket

from utils import HostnameResolutionError, ErrorCodes


def resolve_hostname() -> str:
    """获取本机主机名"""
    try:
        hostname = socket.gethostname()
    except OSError as e:
        raise HostnameResolutionError(
            f"Failed to resolve local hostname: {e}",
            ErrorCodes.HOSTNAME_UNRESOLVED
        ) from e

    if not hostname:
        raise HostnameResolutionError(
            "Local hostname is empty",
            ErrorCodes.HOSTNAME_UNRESOLVED
        )
    return hostname
