"""
Core Lightning plugin entry point.

lightningd talks to the plugin over stdin/stdout, so `Plugin.run()` owns the main
thread and the LNURL web server runs in a daemon thread started from `init`.
"""

import logging
import sys
import threading
from typing import Any, Dict, Optional

import uvicorn
from pyln.client import Plugin

from clnurl.config import (
    DEFAULT_BASE_ADDRESS,
    DEFAULT_DESCRIPTION,
    DEFAULT_LISTEN,
    ServiceConfig,
    rpc_socket_path,
)
from clnurl.exceptions import ConfigurationException
from clnurl.server import create_app

log = logging.getLogger(__name__)


def start_listener(config: ServiceConfig) -> threading.Thread:
    server = uvicorn.Server(
        uvicorn.Config(
            create_app(config),
            host=config.listen_host,
            port=config.listen_port,
            log_config=None,
        )
    )
    log.info("Starting LNURL server on %s:%d", config.listen_host, config.listen_port)
    thread = threading.Thread(target=server.run, name="clnurl-http", daemon=True)
    thread.start()
    return thread


def build_plugin() -> Plugin:
    plugin = Plugin(dynamic=True)
    plugin.add_option(
        "clnurl_listen", DEFAULT_LISTEN, "Listen address for the LNURL web server"
    )
    plugin.add_option(
        "clnurl_base_address",
        DEFAULT_BASE_ADDRESS,
        "Base path under which the API endpoints are reachable, e.g. "
        "https://example.com/lnurl_api/ means endpoints are reachable as "
        "https://example.com/lnurl_api/lnurl and https://example.com/lnurl_api/invoice",
    )
    plugin.add_option(
        "clnurl_description", DEFAULT_DESCRIPTION, "Description to be displayed in LNURL"
    )
    plugin.add_option("clnurl_nostr_pubkey", None, "Nostr pub key of zapper")

    @plugin.init()
    def init(
        options: Dict[str, Any], configuration: Dict[str, Any], plugin: Plugin, **kwargs
    ) -> Optional[Dict[str, str]]:
        try:
            config = ServiceConfig.from_options(options, rpc_socket_path(configuration))
        except ConfigurationException as ex:
            plugin.log(f"clnurl disabled: {ex.reason}", level="error")
            return {"disable": ex.reason}

        start_listener(config)
        plugin.log(
            f"LNURL server listening on {config.listen_host}:{config.listen_port}, "
            f"public base address {config.base_address}"
        )
        return None

    return plugin


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        stream=sys.stderr,
        format="%(name)s: %(levelname)s %(message)s",
    )
    build_plugin().run()


if __name__ == "__main__":
    main()
