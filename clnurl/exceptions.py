import json
from typing import Any, Optional

from clnurl.error_codes import ErrorCode


class ClnurlException(Exception):
    def __init__(self, reason: str, error_code: ErrorCode) -> None:
        super().__init__(reason)
        self.reason = reason
        self.code = error_code.value.code
        self.http_status_code = error_code.value.http_status_code
        self.error_code = error_code

    def get_additional_params(self) -> dict:
        """Override this method in child classes to add additional parameters to the JSON output"""
        return {}

    def to_dict(self) -> dict:
        return {
            "status": "ERROR",
            "reason": self.reason,
            "code": self.code,
            **self.get_additional_params(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls: type["ClnurlException"], json_str: str) -> "ClnurlException":
        try:
            data = json.loads(json_str)
            error_code = ErrorCode[data["code"]]
            return cls(data["reason"], error_code)
        except (json.JSONDecodeError, KeyError):
            return cls(
                f"Failed to parse error JSON: {json_str}", ErrorCode.INTERNAL_ERROR
            )

    def to_http_status_code(self) -> int:
        return self.http_status_code

    def __reduce__(self):
        return (_rebuild_exception, (type(self), self.__dict__.copy()))


def _rebuild_exception(cls: type, state: dict) -> ClnurlException:
    # Subclasses take different constructor arguments, so restore state directly.
    exc = cls.__new__(cls)
    Exception.__init__(exc, state["reason"])
    exc.__dict__.update(state)
    return exc


class ConfigurationException(ClnurlException):
    def __init__(self, reason: str = "Invalid configuration"):
        super().__init__(reason, ErrorCode.INVALID_CONFIGURATION)


class InvalidRequestException(ClnurlException):
    def __init__(
        self,
        reason: str = "Invalid request",
        error_code: ErrorCode = ErrorCode.INVALID_REQUEST_FORMAT,
    ):
        super().__init__(reason, error_code)


class AmountOutOfRangeException(InvalidRequestException):
    def __init__(self, amount_msats: int, min_sendable: int, max_sendable: int):
        super().__init__(
            f"Amount {amount_msats} msat is outside of the range "
            f"{min_sendable}..{max_sendable} msat.",
            ErrorCode.AMOUNT_OUT_OF_RANGE,
        )
        self.amount_msats = amount_msats
        self.min_sendable = min_sendable
        self.max_sendable = max_sendable

    def get_additional_params(self) -> dict:
        return {"minSendable": self.min_sendable, "maxSendable": self.max_sendable}


class MalformedEventException(InvalidRequestException):
    def __init__(self, reason: str = "Malformed nostr event"):
        super().__init__(reason, ErrorCode.INVALID_NOSTR_EVENT)


class InvalidZapRequestException(InvalidRequestException):
    def __init__(self, reason: str = "Invalid zap request"):
        super().__init__(reason, ErrorCode.INVALID_ZAP_REQUEST)


class InvalidSignatureException(ClnurlException):
    def __init__(self, reason: str = "Cannot verify signature"):
        super().__init__(reason, ErrorCode.INVALID_SIGNATURE)


class NodeException(ClnurlException):
    """Base class for failures talking to the lightning node."""


class NodeConnectionException(NodeException):
    def __init__(self, reason: str = "Lightning node is unreachable"):
        super().__init__(reason, ErrorCode.NODE_UNREACHABLE)


class NodeRpcException(NodeException):
    def __init__(
        self,
        reason: str = "Lightning node returned an error",
        rpc_error: Optional[Any] = None,
    ):
        super().__init__(reason, ErrorCode.NODE_RPC_ERROR)
        self.rpc_error = rpc_error


class UnexpectedResponseKindException(NodeException):
    def __init__(self, reason: str = "Lightning node returned an unexpected response"):
        super().__init__(reason, ErrorCode.UNEXPECTED_NODE_RESPONSE)
