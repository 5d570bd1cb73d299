from clnurl.amount import decode_amount, encode_amount, parse_amount
from clnurl.config import ServiceConfig
from clnurl.exceptions import *
from clnurl.invoice_creator import (
    ClnInvoiceCreator,
    INodeInvoiceCreator,
    InvoiceResponse,
    NodeResponse,
    UnexpectedResponse,
)
from clnurl.lnurl import (
    MAX_SENDABLE_MSATS,
    MIN_SENDABLE_MSATS,
    create_encoded_metadata,
    create_lnurlp_response,
    create_pay_req_response,
)
from clnurl.nostr_event import (
    ZAP_REQUEST_KIND,
    get_tag_value,
    parse_nostr_event,
    verify_nostr_event,
)
from clnurl.protocol.lnurlp_response import LnurlpResponse
from clnurl.protocol.payreq import PayRequest
from clnurl.protocol.payreq_response import PayReqResponse
from clnurl.server import create_app
