"""
Binds the four slots a StdioContext can replace to the attributes holding
them, and keeps the stack of contexts entered against those attributes.

``process_environment`` is bound to ``sys.stdin``, ``sys.stdout``,
``sys.stderr`` and ``stdiocontext.console.console``, and is what contexts use
unless told otherwise.  Other environments are useful to run contexts
against objects which are not process-wide, e.g. in tests.
"""

from __future__ import annotations

import sys
from typing import Any
from typing import Callable
from typing import Dict
from typing import Mapping
from typing import TextIO
from typing import Tuple

import stdiocontext.console
import stdiocontext.lib.slots
from stdiocontext.lib.slots import SlotDescriptor
from stdiocontext.lib.stack import ContextStack

INPUT = "input"
OUTPUT = "output"
ERROR = "error"
LOG_FACADE = "log_facade"

STREAM_SLOTS = (INPUT, OUTPUT, ERROR)
# Restoration order
SLOTS = STREAM_SLOTS + (LOG_FACADE,)


class Environment:
    def __init__(
        self,
        bindings: Mapping[str, Tuple[object, str]],
        console_factory: Callable[[TextIO, TextIO], Any] = stdiocontext.console.Console,
    ) -> None:
        missing = [slot for slot in SLOTS if slot not in bindings]
        if missing:
            raise ValueError(f"no binding for slot(s) {', '.join(missing)}")

        self.bindings: Dict[str, Tuple[object, str]] = {slot: bindings[slot] for slot in SLOTS}
        self.console_factory = console_factory
        self.stack = ContextStack(self)

    @classmethod
    def from_namespace(cls, namespace: object, **kwargs: Any) -> Environment:
        """Environment whose slots are the attributes of ``namespace`` named
        after them, i.e. ``namespace.input``, ``namespace.output``, ..."""
        return cls({slot: (namespace, slot) for slot in SLOTS}, **kwargs)

    @property
    def slots(self) -> Tuple[str, ...]:
        return SLOTS

    def get(self, slot: str) -> Any:
        owner, name = self.bindings[slot]
        return getattr(owner, name, None)

    def descriptor(self, slot: str) -> SlotDescriptor:
        owner, name = self.bindings[slot]
        return stdiocontext.lib.slots.get_descriptor(owner, name)

    def replace(self, slot: str, value: Any) -> SlotDescriptor:
        owner, name = self.bindings[slot]
        return stdiocontext.lib.slots.replace_slot(owner, name, value)

    def restore(self, slot: str, descriptor: SlotDescriptor) -> None:
        owner, name = self.bindings[slot]
        stdiocontext.lib.slots.restore_slot(owner, name, descriptor)

    def has_descriptor(self, slot: str, descriptor: SlotDescriptor) -> bool:
        owner, name = self.bindings[slot]
        return stdiocontext.lib.slots.descriptors_equal(owner, name, descriptor)

    def new_console(self) -> Any:
        return self.console_factory(self.get(OUTPUT), self.get(ERROR))

    def __repr__(self) -> str:
        bound = ", ".join(
            f"{slot}={getattr(owner, '__name__', type(owner).__name__)}.{name}"
            for slot, (owner, name) in self.bindings.items()
        )
        return f"<Environment {bound}>"


process_environment = Environment(
    {
        INPUT: (sys, "stdin"),
        OUTPUT: (sys, "stdout"),
        ERROR: (sys, "stderr"),
        LOG_FACADE: (stdiocontext.console, "console"),
    }
)
