"""
Stack of entered StdioContexts and the algorithm which unwinds it.

Contexts are restored in the reverse of the order they were entered.  When a
context which is not on top of the stack exits, it is only marked as exited.
Its streams are restored once every context entered after it has exited too.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING
from typing import Dict
from typing import List

from stdiocontext.exception import ExitDisciplineError
from stdiocontext.lib.slots import SlotDescriptor

if TYPE_CHECKING:
    from stdiocontext.context import StdioContext
    from stdiocontext.environment import Environment

log = logging.getLogger(__name__)


@dataclass
class ContextEntry:
    context: StdioContext
    exited: bool = False
    # Slots changed by the context, as they were when enter() was called
    before_enter: Dict[str, SlotDescriptor] = field(default_factory=dict)
    # Slots changed by the context, as they were when enter() returned
    after_enter: Dict[str, SlotDescriptor] = field(default_factory=dict)


class ContextStack:
    def __init__(self, environment: Environment) -> None:
        self.environment = environment
        self.entries: List[ContextEntry] = []

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def depth(self) -> int:
        return len(self.entries)

    def push(self, entry: ContextEntry) -> None:
        self.entries.append(entry)

    def find(self, context: StdioContext) -> int:
        """Index of the topmost entry for ``context``, or -1 if there is none."""
        index = len(self.entries) - 1
        while index >= 0 and self.entries[index].context is not context:
            index -= 1
        return index

    def exit(self, context: StdioContext) -> None:
        index = self.find(context)
        if index < 0:
            log.debug("exit() called on %r which has already exited completely", context)
            if context.strict:
                raise ExitDisciplineError("Extra StdioContext.exit()")
            return

        entry = self.entries[index]
        entry.exited = True

        if index != len(self.entries) - 1:
            # Restored later, once everything above it has exited
            log.debug("exit() called on non-current %r, deferring restore", context)
            if context.strict:
                raise ExitDisciplineError("Mismatched StdioContext.exit()")
            return

        while self.entries and self.entries[-1].exited:
            self.restore(self.entries.pop())

    def restore(self, entry: ContextEntry) -> None:
        """Restores the slots changed by ``entry`` unless they were changed
        again by someone else, in which case ``overwrite`` and ``strict``
        decide what happens."""
        context = entry.context
        environment = self.environment

        log.debug("restoring state from %r", context)

        modified = []
        for slot in environment.slots:
            before = entry.before_enter.get(slot)
            if before is None:
                continue
            if context.overwrite or environment.has_descriptor(slot, entry.after_enter[slot]):
                environment.restore(slot, before)
            elif context.strict:
                modified.append(slot)
            else:
                log.debug("%s modified outside %r, leaving it in place", slot, context)

        if modified:
            raise ExitDisciplineError(f"{', '.join(modified)} modified outside StdioContext")
