from pyln.client import Millisatoshi

from clnurl.exceptions import InvalidRequestException

MAX_WIRE_AMOUNT_MSATS = 2**64 - 1


def decode_amount(raw: int) -> Millisatoshi:
    """
    Converts a wire amount (a plain count of millisatoshis) into the amount type
    used by the node RPC. Both sides are in millisatoshis, so no scaling happens.

    Args:
        raw: the non-negative millisatoshi count, at most 2^64 - 1.
    """
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise InvalidRequestException(f"Amount must be an integer, got {raw!r}.")
    if raw < 0 or raw > MAX_WIRE_AMOUNT_MSATS:
        raise InvalidRequestException(
            f"Amount {raw} is not a valid unsigned 64-bit millisatoshi count."
        )
    return Millisatoshi(raw)


def encode_amount(amount: Millisatoshi) -> int:
    return amount.millisatoshis


def parse_amount(raw: str) -> Millisatoshi:
    """Decodes an amount given as a decimal string, as found in a query string."""
    if not raw or not raw.isascii() or not raw.isdigit():
        raise InvalidRequestException(f"Amount must be a decimal integer, got {raw!r}.")
    digits = raw.lstrip("0") or "0"
    if len(digits) > len(str(MAX_WIRE_AMOUNT_MSATS)):
        raise InvalidRequestException(
            f"Amount has {len(digits)} digits, more than any valid millisatoshi count."
        )
    return decode_amount(int(digits))
