from dataclasses import dataclass
from typing import Any, Dict, Optional

from pyln.client import Millisatoshi

from clnurl.amount import encode_amount
from clnurl.JSONable import JSONable

PAY_REQUEST_TAG = "payRequest"


@dataclass
class LnurlpResponse(JSONable):
    min_sendable: Millisatoshi
    """
    The minimum amount that the sender can send in millisatoshis.
    """

    max_sendable: Millisatoshi
    """
    The maximum amount that the sender can send in millisatoshis.
    """

    encoded_metadata: str
    """
    JSON-encoded metadata. Wallets hash this exact string and compare it to the
    description hash of the invoice they receive.
    """

    callback: str
    """
    The URL that the sender will call for the invoice.
    """

    tag: str = PAY_REQUEST_TAG

    allows_nostr: bool = False
    """
    Whether the receiver accepts nostr zap requests (NIP-57).
    """

    nostr_pubkey: Optional[str] = None
    """
    The BIP-340 public key, in hex, that signs zap receipts. Only set when
    `allows_nostr` is true.
    """

    @classmethod
    def _get_field_name_overrides(cls) -> Dict[str, str]:
        return {"encoded_metadata": "metadata"}

    def to_dict(self) -> Dict[str, Any]:
        resp = super().to_dict()
        resp["minSendable"] = encode_amount(self.min_sendable)
        resp["maxSendable"] = encode_amount(self.max_sendable)
        return resp
