from typing import TypeVar

from common.errors import InvalidIdError

T = TypeVar("T")


def parse_id(id_type: type[T], raw, entity: str) -> T:
    """Build an ID value object, mapping malformed input to InvalidIdError."""
    try:
        return id_type.from_string(raw)
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidIdError(entity) from exc
