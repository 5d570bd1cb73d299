from dataclasses import dataclass
from typing import Mapping, Optional

from pyln.client import Millisatoshi

from clnurl.amount import parse_amount
from clnurl.exceptions import InvalidRequestException


@dataclass
class PayRequest:
    """
    The query parameters a wallet sends to the invoice callback.
    """

    amount: Millisatoshi
    """
    The amount the payer wants to send, in millisatoshis.
    """

    nostr: Optional[str] = None
    """
    A JSON-encoded, signed NIP-57 zap request. Optional.
    """

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "PayRequest":
        raw_amount = params.get("amount")
        if raw_amount is None:
            raise InvalidRequestException("Missing amount parameter.")
        return cls(amount=parse_amount(raw_amount), nostr=params.get("nostr"))
