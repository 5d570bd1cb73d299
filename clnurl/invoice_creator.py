import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Union

from pyln.client import LightningRpc, Millisatoshi, RpcError

from clnurl.exceptions import NodeConnectionException, NodeRpcException

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvoiceResponse:
    bolt11: str


@dataclass(frozen=True)
class UnexpectedResponse:
    raw: Any


NodeResponse = Union[InvoiceResponse, UnexpectedResponse]


class INodeInvoiceCreator(ABC):
    @abstractmethod
    def create_invoice(
        self,
        amount_msat: Millisatoshi,
        label: str,
        description: str,
        deschashonly: bool,
    ) -> NodeResponse:
        """
        Asks the node to issue a BOLT11 invoice.

        Args:
            amount_msat: the exact amount of the invoice.
            label: a label unique among all invoices of the node.
            description: the description. With `deschashonly` only its sha256 ends up
                in the invoice.
            deschashonly: whether to commit to the description by hash only.

        Raises:
            NodeConnectionException: if the node could not be reached.
            NodeRpcException: if the node rejected the call.
        """


class ClnInvoiceCreator(INodeInvoiceCreator):
    """
    Creates invoices through the JSON-RPC unix socket of a Core Lightning node.
    A new connection is opened for every call and closed once the reply is read.
    """

    def __init__(self, rpc_socket: str) -> None:
        self._rpc_socket = rpc_socket

    def _build_rpc(self) -> LightningRpc:
        return LightningRpc(self._rpc_socket)

    def create_invoice(
        self,
        amount_msat: Millisatoshi,
        label: str,
        description: str,
        deschashonly: bool,
    ) -> NodeResponse:
        rpc = self._build_rpc()
        payload = {
            "amount_msat": amount_msat,
            "label": label,
            "description": description,
            "deschashonly": deschashonly,
        }
        try:
            result = rpc.call("invoice", payload)
        except RpcError as ex:
            raise NodeRpcException(
                f"Node rejected invoice request: {ex.error}", ex.error
            ) from ex
        except (OSError, ValueError) as ex:
            raise NodeConnectionException(
                f"Cannot reach node at {self._rpc_socket}: {ex}"
            ) from ex
        return parse_invoice_response(result)


def parse_invoice_response(result: Any) -> NodeResponse:
    if not isinstance(result, dict) or not isinstance(result.get("bolt11"), str):
        log.warning("Node returned a non-invoice response: %r", result)
        return UnexpectedResponse(raw=result)
    return InvoiceResponse(bolt11=result["bolt11"])
