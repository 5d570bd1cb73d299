import json
import logging
from uuid import uuid4

from pyln.client import Millisatoshi

from clnurl.amount import decode_amount, encode_amount
from clnurl.config import ServiceConfig
from clnurl.exceptions import (
    AmountOutOfRangeException,
    InvalidZapRequestException,
    UnexpectedResponseKindException,
)
from clnurl.invoice_creator import INodeInvoiceCreator, InvoiceResponse
from clnurl.nostr_event import get_tag_value, verify_nostr_event
from clnurl.protocol.lnurlp_response import LnurlpResponse
from clnurl.protocol.payreq import PayRequest
from clnurl.protocol.payreq_response import PayReqResponse
from clnurl.urls import join_callback_url

log = logging.getLogger(__name__)

MIN_SENDABLE_MSATS = 1
MAX_SENDABLE_MSATS = 100_000_000_000

INVOICE_ENDPOINT = "invoice"


def create_encoded_metadata(description: str) -> str:
    return json.dumps(
        [["text/plain", description]], separators=(",", ":"), ensure_ascii=False
    )


def create_lnurlp_response(config: ServiceConfig) -> LnurlpResponse:
    """
    Creates the payment descriptor returned by the lnurl endpoint.

    Args:
        config: the service configuration. The same configuration always yields
            the same descriptor.
    """
    return LnurlpResponse(
        min_sendable=decode_amount(MIN_SENDABLE_MSATS),
        max_sendable=decode_amount(MAX_SENDABLE_MSATS),
        encoded_metadata=create_encoded_metadata(config.description),
        callback=join_callback_url(config.base_address, INVOICE_ENDPOINT),
        allows_nostr=config.allows_nostr,
        nostr_pubkey=config.nostr_pubkey,
    )


def create_pay_req_response(
    request: PayRequest,
    config: ServiceConfig,
    invoice_creator: INodeInvoiceCreator,
) -> PayReqResponse:
    """
    Issues an invoice for a pay request.

    Args:
        request: the parsed callback parameters.
        config: the service configuration.
        invoice_creator: the object that asks the node for the invoice. In practice,
            this is a `ClnInvoiceCreator` bound to the node's RPC socket.

    Raises:
        AmountOutOfRangeException: if the amount is outside the advertised bounds.
        MalformedEventException: if the attached zap request cannot be parsed.
        InvalidSignatureException: if the attached zap request is not validly signed.
        InvalidZapRequestException: if the zap request commits to another amount.
        NodeException: if the node could not issue the invoice.
    """
    amount_msats = encode_amount(request.amount)
    if not MIN_SENDABLE_MSATS <= amount_msats <= MAX_SENDABLE_MSATS:
        raise AmountOutOfRangeException(
            amount_msats, MIN_SENDABLE_MSATS, MAX_SENDABLE_MSATS
        )

    description = (
        _zap_request_description(request.nostr, request.amount)
        if request.nostr is not None
        else create_encoded_metadata(config.description)
    )

    node_response = invoice_creator.create_invoice(
        amount_msat=request.amount,
        label=str(uuid4()),
        description=description,
        deschashonly=True,
    )
    if not isinstance(node_response, InvoiceResponse):
        raise UnexpectedResponseKindException(
            "Node answered the invoice call with an unexpected response."
        )

    log.info(
        "Issued invoice for %d msat (zap=%s)", amount_msats, request.nostr is not None
    )
    return PayReqResponse(encoded_invoice=node_response.bolt11, routes=[])


def _zap_request_description(event_json: str, amount: Millisatoshi) -> str:
    event = verify_nostr_event(event_json)
    zap_amount = get_tag_value(event, "amount")
    if zap_amount is not None and zap_amount != str(encode_amount(amount)):
        raise InvalidZapRequestException(
            f"Zap request is for {zap_amount} msat but {encode_amount(amount)} msat were requested."
        )
    return event.as_json()
