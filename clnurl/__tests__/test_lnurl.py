import json
from dataclasses import replace
from typing import List, Optional
from uuid import UUID

import pytest
from pyln.client import Millisatoshi

from clnurl.config import ServiceConfig
from clnurl.exceptions import (
    AmountOutOfRangeException,
    InvalidSignatureException,
    InvalidZapRequestException,
    MalformedEventException,
    NodeConnectionException,
    UnexpectedResponseKindException,
)
from clnurl.invoice_creator import (
    INodeInvoiceCreator,
    InvoiceResponse,
    NodeResponse,
    UnexpectedResponse,
)
from clnurl.lnurl import create_lnurlp_response, create_pay_req_response
from clnurl.protocol.lnurlp_response import LnurlpResponse
from clnurl.protocol.payreq import PayRequest

ZAP_PROVIDER_PUBKEY = "9630f464cca6a5147aa8a35f0bcdd3ce485324e732fd39e09233b1d848238f31"


class DummyNodeInvoiceCreator(INodeInvoiceCreator):
    DUMMY_INVOICE = "lnbc10n1pdummy"

    def __init__(self, response: Optional[NodeResponse] = None) -> None:
        self.response = response or InvoiceResponse(bolt11=self.DUMMY_INVOICE)
        self.calls: List[dict] = []

    def create_invoice(
        self,
        amount_msat: Millisatoshi,
        label: str,
        description: str,
        deschashonly: bool,
    ) -> NodeResponse:
        self.calls.append(
            {
                "amount_msat": amount_msat,
                "label": label,
                "description": description,
                "deschashonly": deschashonly,
            }
        )
        return self.response


class FailingNodeInvoiceCreator(INodeInvoiceCreator):
    def create_invoice(self, amount_msat, label, description, deschashonly):
        raise NodeConnectionException("connection refused")


def test_lnurlp_response_serialization() -> None:
    lnurlp_response = LnurlpResponse(
        min_sendable=Millisatoshi(0),
        max_sendable=Millisatoshi(1000000),
        encoded_metadata=json.dumps(
            [["text/plain", "Hello world"]], separators=(",", ":")
        ),
        callback="http://example.com/",
        allows_nostr=True,
        nostr_pubkey=ZAP_PROVIDER_PUBKEY,
    )

    assert (
        json.dumps(lnurlp_response.to_dict(), separators=(",", ":"))
        == '{"minSendable":0,"maxSendable":1000000,"metadata":"[[\\"text/plain\\",\\"Hello world\\"]]",'
        '"callback":"http://example.com/","tag":"payRequest","allowsNostr":true,'
        '"nostrPubkey":"' + ZAP_PROVIDER_PUBKEY + '"}'
    )


def test_create_lnurlp_response(service_config: ServiceConfig) -> None:
    response = create_lnurlp_response(service_config)

    assert response.to_dict() == {
        "minSendable": 1,
        "maxSendable": 100_000_000_000,
        "metadata": '[["text/plain","Hello world"]]',
        "callback": "http://example.com/invoice",
        "tag": "payRequest",
        "allowsNostr": False,
    }
    assert "nostrPubkey" not in response.to_dict()
    assert create_lnurlp_response(service_config) == response


def test_create_lnurlp_response_with_nostr(service_config: ServiceConfig) -> None:
    config = replace(service_config, nostr_pubkey=ZAP_PROVIDER_PUBKEY)
    response = create_lnurlp_response(config).to_dict()

    assert response["allowsNostr"] is True
    assert response["nostrPubkey"] == ZAP_PROVIDER_PUBKEY


def test_callback_is_resolved_against_base_address(
    service_config: ServiceConfig,
) -> None:
    config = replace(service_config, base_address="https://example.com/lnurl_api/")
    assert create_lnurlp_response(config).callback == "https://example.com/lnurl_api/invoice"

    config = replace(service_config, base_address="https://example.com/lnurl_api")
    assert create_lnurlp_response(config).callback == "https://example.com/invoice"


def test_pay_req_response_without_nostr(service_config: ServiceConfig) -> None:
    invoice_creator = DummyNodeInvoiceCreator()
    request = PayRequest.from_query_params({"amount": "1000"})

    response = create_pay_req_response(request, service_config, invoice_creator)

    assert response.to_dict() == {"pr": DummyNodeInvoiceCreator.DUMMY_INVOICE, "routes": []}
    [call] = invoice_creator.calls
    assert call["amount_msat"] == Millisatoshi(1000)
    assert call["deschashonly"] is True
    assert (
        call["description"]
        == create_lnurlp_response(service_config).encoded_metadata
        == '[["text/plain","Hello world"]]'
    )
    UUID(call["label"])


def test_labels_are_unique(service_config: ServiceConfig) -> None:
    invoice_creator = DummyNodeInvoiceCreator()
    request = PayRequest.from_query_params({"amount": "1000"})
    for _ in range(3):
        create_pay_req_response(request, service_config, invoice_creator)

    labels = {call["label"] for call in invoice_creator.calls}
    assert len(labels) == 3


def test_pay_req_response_with_zap_request(
    service_config: ServiceConfig, make_event
) -> None:
    event = make_event(tags=[["p", ZAP_PROVIDER_PUBKEY], ["amount", "21000"]])
    invoice_creator = DummyNodeInvoiceCreator()
    request = PayRequest(amount=Millisatoshi(21000), nostr=json.dumps(event))

    response = create_pay_req_response(request, service_config, invoice_creator)

    assert response.encoded_invoice == DummyNodeInvoiceCreator.DUMMY_INVOICE
    [call] = invoice_creator.calls
    assert call["description"] == json.dumps(
        event, separators=(",", ":"), ensure_ascii=False
    )
    assert call["amount_msat"] == Millisatoshi(21000)


def test_zap_request_without_amount_tag(
    service_config: ServiceConfig, make_event
) -> None:
    invoice_creator = DummyNodeInvoiceCreator()
    request = PayRequest(amount=Millisatoshi(500), nostr=json.dumps(make_event()))

    create_pay_req_response(request, service_config, invoice_creator)
    assert len(invoice_creator.calls) == 1


def test_zap_request_for_other_amount(
    service_config: ServiceConfig, make_event
) -> None:
    event = make_event(tags=[["p", ZAP_PROVIDER_PUBKEY], ["amount", "1000"]])
    invoice_creator = DummyNodeInvoiceCreator()
    request = PayRequest(amount=Millisatoshi(500), nostr=json.dumps(event))

    with pytest.raises(InvalidZapRequestException):
        create_pay_req_response(request, service_config, invoice_creator)
    assert invoice_creator.calls == []


def test_tampered_zap_request_does_not_reach_node(
    service_config: ServiceConfig, make_event
) -> None:
    event = make_event()
    event["sig"] = "00" * 64
    invoice_creator = DummyNodeInvoiceCreator()
    request = PayRequest(amount=Millisatoshi(500), nostr=json.dumps(event))

    with pytest.raises(InvalidSignatureException):
        create_pay_req_response(request, service_config, invoice_creator)
    assert invoice_creator.calls == []


def test_malformed_zap_request(service_config: ServiceConfig) -> None:
    invoice_creator = DummyNodeInvoiceCreator()
    request = PayRequest(amount=Millisatoshi(500), nostr="{not json")

    with pytest.raises(MalformedEventException):
        create_pay_req_response(request, service_config, invoice_creator)
    assert invoice_creator.calls == []


@pytest.mark.parametrize("amount", [0, 100_000_000_001, 2**64 - 1])
def test_amount_out_of_range(service_config: ServiceConfig, amount: int) -> None:
    invoice_creator = DummyNodeInvoiceCreator()
    request = PayRequest(amount=Millisatoshi(amount))

    with pytest.raises(AmountOutOfRangeException):
        create_pay_req_response(request, service_config, invoice_creator)
    assert invoice_creator.calls == []


@pytest.mark.parametrize("amount", [1, 100_000_000_000])
def test_amount_bounds_are_inclusive(service_config: ServiceConfig, amount: int) -> None:
    invoice_creator = DummyNodeInvoiceCreator()
    request = PayRequest(amount=Millisatoshi(amount))

    create_pay_req_response(request, service_config, invoice_creator)
    assert invoice_creator.calls[0]["amount_msat"] == Millisatoshi(amount)


def test_unexpected_node_response(service_config: ServiceConfig) -> None:
    invoice_creator = DummyNodeInvoiceCreator(
        UnexpectedResponse(raw={"payment_hash": "00" * 32})
    )
    request = PayRequest(amount=Millisatoshi(1000))

    with pytest.raises(UnexpectedResponseKindException):
        create_pay_req_response(request, service_config, invoice_creator)


def test_node_failure_propagates(service_config: ServiceConfig) -> None:
    request = PayRequest(amount=Millisatoshi(1000))

    with pytest.raises(NodeConnectionException):
        create_pay_req_response(request, service_config, FailingNodeInvoiceCreator())
