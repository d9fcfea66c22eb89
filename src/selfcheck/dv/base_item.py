# SPDX-FileCopyrightText: 2025 Hugh Walsh
#
# SPDX-License-Identifier: MIT

# This file: src/selfcheck/dv/base_item.py

"""Transaction base: named input and output fields, freezing on publication."""

from __future__ import annotations

import copy
import json
from typing import Any, Iterable, Self

import pyuvm


class ItemFrozenError(AttributeError):
    """Assignment to a public attribute of a published item."""


class BaseItem(pyuvm.uvm_sequence_item):
    """One stimulus/response exchange with the DUT.

    A subclass names its fields through two hooks: ``_in_fields`` for what a
    sequence chooses and ``_out_fields`` for what the DUT answers. Outputs
    stay ``None`` until a monitor has captured them.

    A monitor publishes each item exactly once and calls :meth:`freeze`
    first. Every subscriber then sees the same object and none may change
    it. Attributes starting with ``_`` stay writable because pyuvm keeps its
    own bookkeeping there. A subscriber that wants a modified copy takes a
    :meth:`clone`.

    Example:
        >>> class ParityItem(BaseItem):
        ...     def __init__(self, name="parity_item"):
        ...         super().__init__(name)
        ...         self.data = 0
        ...         self.parity = None
        ...
        ...     def _in_fields(self):
        ...         return ("data",)
        ...
        ...     def _out_fields(self):
        ...         return ("parity",)
    """

    def __init__(self, name: str = "item") -> None:
        object.__setattr__(self, "_frozen", False)
        super().__init__(name)

    def __setattr__(self, key: str, value: Any) -> None:
        if not key.startswith("_") and self.frozen:
            raise ItemFrozenError(
                f"{type(self).__name__}.{key} is read-only after publication"
            )
        super().__setattr__(key, value)

    def _in_fields(self) -> Iterable[str]:
        return ()

    def _out_fields(self) -> Iterable[str]:
        return ()

    def _all_fields(self) -> tuple[str, ...]:
        # inputs first, first declaration wins
        return tuple(dict.fromkeys((*self._in_fields(), *self._out_fields())))

    def _pick(self, fields: Iterable[str]) -> dict[str, Any]:
        return {f: getattr(self, f) for f in fields}

    @property
    def frozen(self) -> bool:
        return bool(self.__dict__.get("_frozen", False))

    def freeze(self) -> Self:
        """Lock the public attributes; returns self for ``ap.write(tr.freeze())``."""
        object.__setattr__(self, "_frozen", True)
        return self

    def is_captured(self) -> bool:
        return all(v is not None for v in self._pick(self._out_fields()).values())

    def clone(self) -> Self:
        """Deep, writable copy."""
        dup = copy.deepcopy(self)
        object.__setattr__(dup, "_frozen", False)
        return dup

    def copy_from(self, other: Self) -> None:
        """Take every field from ``other``, which must be the same concrete type.

        Raises:
            TypeError: Types differ.
        """
        if type(other) is not type(self):
            raise TypeError(
                f"copy_from: {type(other).__name__} -> {type(self).__name__}"
            )
        for name, value in other.to_dict().items():
            setattr(self, name, value)

    def to_dict(self) -> dict[str, object]:
        return self._pick(self._all_fields())

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    def inputs_str(self) -> str:
        return json.dumps(self._pick(self._in_fields()), sort_keys=True)

    def outputs_str(self) -> str:
        return json.dumps(self._pick(self._out_fields()), sort_keys=True)

    def _same(self, other: Any, fields: Iterable[str]) -> bool:
        if type(other) is not type(self):
            return False
        return self._pick(fields) == other._pick(fields)

    def compare_in(self, other: Self, *, fields: Iterable[str] | None = None) -> bool:
        """Equality over the input fields (or the given subset)."""
        return self._same(other, list(self._in_fields() if fields is None else fields))

    def compare_out(self, other: Self, *, fields: Iterable[str] | None = None) -> bool:
        """Equality over the output fields (or the given subset)."""
        return self._same(other, list(self._out_fields() if fields is None else fields))

    def do_compare(self, rhs: Any) -> bool:
        return self._same(rhs, self._all_fields())
