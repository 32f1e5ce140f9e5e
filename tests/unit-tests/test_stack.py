from __future__ import annotations

import io

from stdiocontext import StdioContext


def test_find_returns_topmost_entry(environment):
    first = StdioContext({"output": None}, environment)
    second = StdioContext({"error": None}, environment)
    stack = environment.stack

    assert stack.find(first) == -1

    first.enter()
    second.enter()
    first.enter()

    assert len(stack) == 3
    assert stack.find(first) == 2
    assert stack.find(second) == 1


def test_entries_record_touched_slots(stdio, environment):
    new_input = io.StringIO()
    context = StdioContext({"input": new_input}, environment)

    context.enter()
    (entry,) = environment.stack.entries

    assert entry.context is context
    assert not entry.exited
    assert set(entry.before_enter) == {"input"}
    assert set(entry.after_enter) == {"input"}
    assert entry.after_enter["input"].value is new_input

    context.exit()
    assert environment.stack.entries == []


def test_deferred_exits_unwind_together(stdio, environment, snapshot):
    before = snapshot()
    contexts = [StdioContext({"output": io.StringIO()}, environment) for _ in range(3)]
    for context in contexts:
        context.enter()
    during_last = snapshot()

    contexts[1].exit()
    contexts[0].exit()
    assert snapshot() == during_last
    assert environment.stack.depth == 3

    contexts[2].exit()
    assert snapshot() == before
    assert environment.stack.depth == 0


def test_exit_only_unwinds_exited_entries(stdio, environment, snapshot):
    outer = StdioContext({"output": io.StringIO()}, environment)
    middle = StdioContext({"output": io.StringIO()}, environment)
    inner = StdioContext({"output": io.StringIO()}, environment)

    outer.enter()
    during_outer = snapshot()
    middle.enter()
    inner.enter()

    middle.exit()
    inner.exit()

    assert snapshot() == during_outer
    assert environment.stack.depth == 1
