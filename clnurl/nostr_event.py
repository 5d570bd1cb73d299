from typing import Optional

from nostr_sdk import Event, NostrSdkError

from clnurl.exceptions import InvalidSignatureException, MalformedEventException

ZAP_REQUEST_KIND = 9734


def parse_nostr_event(event_json: str) -> Event:
    try:
        return Event.from_json(event_json)
    except NostrSdkError as ex:
        raise MalformedEventException(f"Invalid nostr event: {ex}") from ex


def verify_nostr_event(event_json: str) -> Event:
    """
    Parses a signed nostr event and verifies that its id matches its content and
    that the signature over the id was produced by the declared pubkey.

    Args:
        event_json: the JSON-encoded event, as sent by the wallet.

    Returns:
        The parsed event. `Event.as_json()` gives its canonical compact encoding.

    Raises:
        MalformedEventException: if the JSON is not a well-formed NIP-01 event.
        InvalidSignatureException: if the id or the signature do not match.
    """
    event = parse_nostr_event(event_json)
    if not event.verify():
        raise InvalidSignatureException(
            f"Event {event.id().to_hex()} is not validly signed by "
            f"{event.author().to_hex()}."
        )
    return event


def get_tag_value(event: Event, name: str) -> Optional[str]:
    """Returns the first value of the first tag called `name`, if any."""
    for tag in event.tags().to_vec():
        values = tag.as_vec()
        if len(values) >= 2 and values[0] == name:
            return values[1]
    return None
