from enum import Enum
from dataclasses import dataclass


@dataclass
class ErrorDetails:
    code: str
    http_status_code: int


class ErrorCode(Enum):
    INVALID_CONFIGURATION = ErrorDetails(
        code="INVALID_CONFIGURATION", http_status_code=500
    )
    """The plugin options could not be turned into a valid service configuration"""

    INVALID_REQUEST_FORMAT = ErrorDetails(
        code="INVALID_REQUEST_FORMAT", http_status_code=400
    )
    """The request format is invalid"""

    AMOUNT_OUT_OF_RANGE = ErrorDetails(code="AMOUNT_OUT_OF_RANGE", http_status_code=400)
    """The amount provided is not within the min/max range"""

    INVALID_NOSTR_EVENT = ErrorDetails(code="INVALID_NOSTR_EVENT", http_status_code=400)
    """The nostr event attached to the request could not be parsed"""

    INVALID_ZAP_REQUEST = ErrorDetails(code="INVALID_ZAP_REQUEST", http_status_code=400)
    """The zap request is well formed but inconsistent with the invoice request"""

    INVALID_SIGNATURE = ErrorDetails(code="INVALID_SIGNATURE", http_status_code=400)
    """The provided signature is not valid"""

    NODE_UNREACHABLE = ErrorDetails(code="NODE_UNREACHABLE", http_status_code=502)
    """The lightning node RPC socket could not be reached"""

    NODE_RPC_ERROR = ErrorDetails(code="NODE_RPC_ERROR", http_status_code=502)
    """The lightning node rejected the RPC call"""

    UNEXPECTED_NODE_RESPONSE = ErrorDetails(
        code="UNEXPECTED_NODE_RESPONSE", http_status_code=502
    )
    """The lightning node answered with something other than an invoice"""

    INTERNAL_ERROR = ErrorDetails(code="INTERNAL_ERROR", http_status_code=500)
    """An unexpected error occurred on the server"""
