import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from coincurve.keys import PublicKeyXOnly

from clnurl.exceptions import ConfigurationException
from clnurl.urls import normalize_base_address, parse_listen_address

DEFAULT_LISTEN = "127.0.0.1:9876"
DEFAULT_BASE_ADDRESS = "http://localhost/"
DEFAULT_DESCRIPTION = "Gimme money!"


@dataclass(frozen=True)
class ServiceConfig:
    """
    Process-wide service settings. Built once at startup and passed explicitly to
    every component; never mutated afterwards.
    """

    listen_host: str
    listen_port: int

    base_address: str
    """
    Public URL under which the /lnurl and /invoice endpoints are reachable.
    """

    description: str
    """
    Text shown to the payer and hashed into invoices as text/plain metadata.
    """

    nostr_pubkey: Optional[str]
    """
    Hex-encoded x-only public key that signs zap receipts. Enables NIP-57 zaps.
    """

    rpc_socket: str
    """
    Path to the lightning-rpc unix socket of the node.
    """

    @property
    def allows_nostr(self) -> bool:
        return self.nostr_pubkey is not None

    @classmethod
    def from_options(cls, options: Dict[str, Any], rpc_socket: str) -> "ServiceConfig":
        listen_host, listen_port = parse_listen_address(
            options.get("clnurl_listen") or DEFAULT_LISTEN
        )
        description = options.get("clnurl_description")
        if description is None:
            description = DEFAULT_DESCRIPTION
        return cls(
            listen_host=listen_host,
            listen_port=listen_port,
            base_address=normalize_base_address(
                options.get("clnurl_base_address") or DEFAULT_BASE_ADDRESS
            ),
            description=description,
            nostr_pubkey=_parse_nostr_pubkey(options.get("clnurl_nostr_pubkey")),
            rpc_socket=rpc_socket,
        )


def rpc_socket_path(configuration: Dict[str, Any]) -> str:
    return os.path.join(configuration["lightning-dir"], configuration["rpc-file"])


def _parse_nostr_pubkey(pubkey: Optional[str]) -> Optional[str]:
    if not pubkey:
        return None
    try:
        raw = bytes.fromhex(pubkey)
        if len(raw) != 32:
            raise ValueError("x-only public keys are 32 bytes")
        PublicKeyXOnly(raw)
    except ValueError as ex:
        raise ConfigurationException(
            f"Nostr pubkey {pubkey!r} is not a valid hex-encoded x-only public key."
        ) from ex
    return pubkey.lower()
