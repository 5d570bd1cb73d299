import json
from abc import ABC
from dataclasses import fields
from enum import Enum
from typing import Any, Dict


class JSONable(ABC):
    """
    Mixin for dataclasses that are sent as JSON objects on the wire.

    Field names are converted to camelCase unless overridden by
    `_get_field_name_overrides`. Fields whose value is None are omitted from the
    output entirely rather than emitted as null.
    """

    def to_dict(self) -> Dict[str, Any]:
        overrides = self._get_field_name_overrides()
        json_dict: Dict[str, Any] = {}
        for field in fields(self):  # type: ignore[arg-type]
            value = getattr(self, field.name)
            if value is None:
                continue
            key = overrides.get(field.name, _to_camel_case(field.name))
            json_dict[key] = _to_json_value(value)
        return json_dict

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def _get_field_name_overrides(cls) -> Dict[str, str]:
        return {}


def _to_camel_case(name: str) -> str:
    first, *rest = name.split("_")
    return first + "".join(word.capitalize() for word in rest)


def _to_json_value(value: Any) -> Any:
    if isinstance(value, JSONable):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_to_json_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_json_value(item) for key, item in value.items()}
    return value
