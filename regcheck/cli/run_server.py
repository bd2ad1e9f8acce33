"""Run the regcheck app via Uvicorn.

Modes:

- dev  : local development (reload on, DEBUG logging).
- prod : bind 127.0.0.1, reload off. Put a proxy in front of it.
- LAN  : bind to the current machine's LAN IP for same-network devices.
- WAN  : bind to 0.0.0.0 for external access (containers).

Environment variables:
- REGCHECK_APP_FACTORY: Override the app factory path (default: "regcheck.app:create_app")
"""

import logging
import os
import socket

import uvicorn

from regcheck.logging_utils import uvicorn_log_config

logger = logging.getLogger("regcheck.cli")

DEFAULT_APP_FACTORY = "regcheck.app:create_app"
MODES = ("dev", "prod", "LAN", "WAN")


def lan_ip() -> str:
    """Best-effort LAN IP discovery via a UDP 'connect' trick.

    No packet is sent; connecting a UDP socket only asks the OS which local
    address it would route from.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        return s.getsockname()[0]
    finally:
        s.close()


def resolve_bind(mode: str, host: str, reload: bool | None) -> tuple[str, bool]:
    """Return the (host, reload) pair a mode runs with.

    Raises:
        ValueError: If `mode` is not one of MODES.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r}; expected one of {', '.join(MODES)}")

    is_prod = mode == "prod"
    reload = (not is_prod) if reload is None else reload

    if mode == "WAN":
        host = "0.0.0.0"
    elif mode == "LAN":
        host = lan_ip()
    elif is_prod:
        host = "127.0.0.1"
        reload = False
    return host, reload


def run_server(
    mode: str = "prod",
    host: str = "127.0.0.1",
    port: int = 8080,
    reload: bool | None = None,
    app_factory: str | None = None,
    log_level: str = "INFO",
) -> None:
    """Start the Uvicorn server with sensible defaults per mode.

    Args:
        mode: One of {"dev", "prod", "LAN", "WAN"}.
        host: Host override (only honoured in "dev").
        port: TCP port to listen on.
        reload: Force code reload. If None, True in dev-like modes, False in prod.
        app_factory: App factory path. Defaults to REGCHECK_APP_FACTORY or
            "regcheck.app:create_app".
        log_level: Log level outside dev mode.

    Security:
        - "WAN" binds to 0.0.0.0. Do not expose in untrusted networks
          without a proxy, TLS, and proper hardening.
    """
    if app_factory is None:
        app_factory = os.getenv("REGCHECK_APP_FACTORY", DEFAULT_APP_FACTORY)

    host, reload = resolve_bind(mode, host, reload)
    logger.info("[%s] Binding to %s:%d (reload=%s)", mode.upper(), host, port, reload)

    try:
        uvicorn.run(
            app_factory,
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_config=uvicorn_log_config(mode == "dev", log_level),
        )
    except KeyboardInterrupt:
        pass
