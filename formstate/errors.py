"""Per-field error messages returned by a failed submission."""

from collections.abc import Iterator, Mapping
from typing import Any

Messages = str | list[str]


def _as_list(messages: Any) -> list[str]:
    if messages is None:
        return []
    if isinstance(messages, (list, tuple)):
        return list(messages)
    return [messages]


class ErrorSet:
    """Mapping of field name to one or many error messages.

    A field is either absent or holds at least one message; assigning an
    empty list or None to a field removes it.
    """

    def __init__(self, messages: Mapping[str, Messages] | None = None) -> None:
        self._messages: dict[str, Messages] = {}
        if messages:
            self.set(messages)

    def all(self) -> dict[str, Messages]:
        """Return a copy of the whole mapping."""
        return dict(self._messages)

    def has(self, field: str) -> bool:
        """Check if a field has errors."""
        return field in self._messages

    def has_any(self, *fields: str) -> bool:
        """Check if any of the given fields has errors.

        With no arguments, check whether there is any error at all.
        """
        if not fields:
            return bool(self._messages)
        return any(field in self._messages for field in fields)

    def first(self, field: str) -> str | None:
        """Return the first message for a field, or None."""
        messages = _as_list(self._messages.get(field))
        return messages[0] if messages else None

    def get_all(self, field: str) -> list[str]:
        """Return every message for a field (empty list if none)."""
        return _as_list(self._messages.get(field))

    def only(self, *fields: str) -> list[str]:
        """Return the messages of the given fields, flattened."""
        return [message for field in fields for message in self.get_all(field)]

    def flatten(self) -> list[str]:
        """Return every message in one list."""
        return self.only(*self._messages)

    def set(
        self,
        field: str | Mapping[str, Messages],
        messages: Messages | None = None,
    ) -> None:
        """Replace the errors.

        Args:
            field: Either a complete field -> message(s) mapping, which
                replaces everything, or a single field name.
            messages: The message(s) for `field` when a name is given.
        """
        if isinstance(field, Mapping):
            self._messages = {
                name: value for name, value in field.items() if _as_list(value)
            }
            return

        if _as_list(messages):
            self._messages = {**self._messages, field: messages}
        else:
            self.clear(field)

    def clear(self, field: str | None = None) -> None:
        """Clear one field's errors, or all of them."""
        if field is None:
            self._messages = {}
            return
        self._messages.pop(field, None)

    def __contains__(self, field: object) -> bool:
        return field in self._messages

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        return len(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __repr__(self) -> str:
        return f"ErrorSet({self._messages!r})"
