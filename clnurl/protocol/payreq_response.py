from dataclasses import dataclass, field
from typing import Dict, List, Optional

from clnurl.JSONable import JSONable


@dataclass
class PayReqResponse(JSONable):
    encoded_invoice: str
    """
    The encoded BOLT11 invoice that the sender will use to pay the receiver.
    """

    routes: List[str] = field(default_factory=list)
    """
    Always just an empty array for legacy reasons.
    """

    success_action: Optional[Dict[str, str]] = None
    """
    Defines a struct which can be stored and shown to the user on payment success.
    Never set by this service.
    """

    @classmethod
    def _get_field_name_overrides(cls) -> Dict[str, str]:
        return {"encoded_invoice": "pr"}
