import json
from typing import Any, Callable, Dict, List, Optional

import pytest
from nostr_sdk import EventBuilder, Keys, Kind, Tag, Timestamp

from clnurl.config import ServiceConfig
from clnurl.nostr_event import ZAP_REQUEST_KIND

ZAP_PROVIDER_PUBKEY = "9630f464cca6a5147aa8a35f0bcdd3ce485324e732fd39e09233b1d848238f31"


@pytest.fixture
def service_config() -> ServiceConfig:
    return ServiceConfig(
        listen_host="127.0.0.1",
        listen_port=9876,
        base_address="http://example.com/",
        description="Hello world",
        nostr_pubkey=None,
        rpc_socket="/tmp/lightning-rpc",
    )


@pytest.fixture
def zapper_keys() -> Keys:
    return Keys.generate()


@pytest.fixture
def make_event(zapper_keys: Keys) -> Callable[..., Dict[str, Any]]:
    """Signs an event and returns it as a JSON object in NIP-01 field order."""

    def _make_event(
        tags: Optional[List[List[str]]] = None,
        content: str = "",
        kind: int = ZAP_REQUEST_KIND,
        created_at: Optional[int] = None,
        keys: Optional[Keys] = None,
    ) -> Dict[str, Any]:
        tags = tags if tags is not None else [["p", ZAP_PROVIDER_PUBKEY]]
        builder = EventBuilder(Kind(kind), content).tags(
            [Tag.parse(tag) for tag in tags]
        )
        if created_at is not None:
            builder = builder.custom_created_at(Timestamp.from_secs(created_at))
        event = builder.sign_with_keys(keys or zapper_keys)
        return json.loads(event.as_json())

    return _make_event
