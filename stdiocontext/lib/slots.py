"""
Saves, replaces and restores a single named attribute ("slot") on an owner
object, e.g. ``stdout`` on the ``sys`` module.

The state of a slot is captured as a :class:`SlotDescriptor` rather than as a
bare value, so that an attribute which did not exist before a swap is removed
again on restore instead of being left behind as ``None``.
"""

from __future__ import annotations

from typing import Any
from typing import NamedTuple


class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


class SlotDescriptor(NamedTuple):
    value: Any
    present: bool


def get_descriptor(owner: object, name: str) -> SlotDescriptor:
    value = getattr(owner, name, MISSING)
    if value is MISSING:
        return SlotDescriptor(None, False)
    return SlotDescriptor(value, True)


def replace_slot(owner: object, name: str, value: Any) -> SlotDescriptor:
    """Sets ``owner.name`` to ``value`` and returns the descriptor of the
    previous value.

    The value is installed with ``setattr`` so a property setter defined on
    the owner's type keeps working for later swaps and restores.
    """
    previous = get_descriptor(owner, name)
    setattr(owner, name, value)
    return previous


def restore_slot(owner: object, name: str, descriptor: SlotDescriptor) -> None:
    if descriptor.present:
        setattr(owner, name, descriptor.value)
    elif hasattr(owner, name):
        delattr(owner, name)


def descriptors_equal(owner: object, name: str, descriptor: SlotDescriptor) -> bool:
    """
    Returns True if the slot currently has exactly the given descriptor.
    Values are compared by identity, not equality.
    """
    current = get_descriptor(owner, name)
    return current.present == descriptor.present and current.value is descriptor.value
