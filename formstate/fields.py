"""Field container holding bound values, their baseline and submission flags.

Fields are dynamic: the set of names is whatever was passed to the
constructor or `update()`, plus anything assigned afterwards. The control
attributes listed in `FieldContainer.IGNORE` are never field names.
"""

import logging
from collections.abc import Iterator, Mapping
from copy import deepcopy
from typing import Any, ClassVar, TypeVar

from formstate.errors import ErrorSet

logger = logging.getLogger(__name__)

# JSON-like value bound to a field
FieldValue = None | bool | int | float | str | list[Any] | dict[str, Any]

C = TypeVar("C", bound="FieldContainer")


class FieldContainer:
    """Bound field values plus busy/successful state and an error set.

    Fields are reachable as items (`form["email"]`) and, when the name does
    not collide with a method, as attributes (`form.email`).
    """

    IGNORE: ClassVar[tuple[str, ...]] = ("busy", "successful", "errors", "original_data")

    busy: bool
    successful: bool
    errors: ErrorSet
    original_data: dict[str, Any]
    _fields: dict[str, FieldValue]

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        object.__setattr__(self, "_fields", {})
        self.original_data = {}
        self.busy = False
        self.successful = False
        self.errors = ErrorSet()
        self.update(data or {})

    @classmethod
    def make(cls: type[C], data: Mapping[str, Any] | None = None, /, **augment: Any) -> C:
        """Create an instance from initial data plus extra keyword fields."""
        return cls({**(data or {}), **augment})

    def _is_reserved(self, name: str) -> bool:
        if name in self.IGNORE:
            logger.warning("Ignoring reserved name %r as a field", name)
            return True
        return False

    def update(self, data: Mapping[str, FieldValue]) -> None:
        """Merge data into the baseline and the live fields.

        Existing baseline keys missing from `data` are kept. Reserved
        control names are skipped.
        """
        data = {key: value for key, value in data.items() if not self._is_reserved(key)}
        self.original_data = {**self.original_data, **deepcopy(data)}
        self._fields.update(data)

    def fill(self, data: Mapping[str, FieldValue] | None = None) -> None:
        """Assign every existing field from `data` (None when missing)."""
        data = data or {}
        for key in self.keys():
            self._fields[key] = data.get(key)

    def data(self) -> dict[str, FieldValue]:
        """Return a detached copy of the field values."""
        return deepcopy(self._fields)

    def keys(self) -> list[str]:
        """Return the bound field names in insertion order."""
        return list(self._fields)

    def reset(self) -> None:
        """Restore every field to a copy of its baseline value.

        A field assigned ad hoc that never went through `update()` has no
        baseline entry and is reset to None rather than removed.
        """
        for key in self.keys():
            self._fields[key] = deepcopy(self.original_data.get(key))

    def dirty(self) -> list[str]:
        """Return the fields whose value differs from the baseline."""
        return [
            key
            for key in self.keys()
            if key not in self.original_data or self._fields[key] != self.original_data[key]
        ]

    def is_dirty(self, key: str | None = None) -> bool:
        """Check if one field, or any field, differs from the baseline."""
        changed = self.dirty()
        if key is None:
            return bool(changed)
        return key in changed

    def start_processing(self) -> None:
        """Enter the busy state, clearing errors from a previous attempt."""
        self.errors.clear()
        self.busy = True
        self.successful = False

    def finish_processing(self) -> None:
        self.busy = False
        self.successful = True

    def clear(self) -> None:
        """Clear the errors and the successful flag. `busy` is left as is."""
        self.errors.clear()
        self.successful = False

    # Mapping access

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if self._is_reserved(key):
            return
        self._fields[key] = value

    def __delitem__(self, key: str) -> None:
        del self._fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._fields)

    # Attribute access

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        fields = self.__dict__.get("_fields", {})
        if name in fields:
            return fields[name]
        raise AttributeError(f"{type(self).__name__!r} has no field {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.IGNORE or name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self._fields[name] = value

    def __delattr__(self, name: str) -> None:
        if name in self._fields:
            del self._fields[name]
        else:
            object.__delattr__(self, name)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._fields!r}, busy={self.busy}, "
            f"successful={self.successful}, errors={self.errors!r})"
        )
