from urllib.parse import urljoin, urlparse

from clnurl.exceptions import ConfigurationException


def normalize_base_address(base_address: str) -> str:
    parsed = urlparse(base_address)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationException(
            f"Base address {base_address!r} must be an absolute http(s) URL."
        )
    if not parsed.path:
        parsed = parsed._replace(path="/")
    return parsed.geturl()


def join_callback_url(base_address: str, endpoint: str) -> str:
    # Relative resolution: a base without a trailing slash loses its last segment.
    return urljoin(base_address, endpoint)


def parse_listen_address(listen: str) -> tuple[str, int]:
    host, sep, port = listen.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ConfigurationException(
            f"Listen address {listen!r} must be of the form host:port."
        )
    port_number = int(port)
    if not 0 < port_number <= 65535:
        raise ConfigurationException(f"Listen port {port_number} is out of range.")
    return host.strip("[]"), port_number
