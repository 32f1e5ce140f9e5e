"""
Wrappers which enter a StdioContext when a function is called and exit it
when the function is done.

A function is done when it raises, or when it returns a result which is not
pending and it was not given a callback.  Otherwise it is done when its
callback is first called, or when the future or awaitable it returned
settles, whichever comes first.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import enum
import functools
import inspect
from typing import TYPE_CHECKING
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import TypeVar

from typing_extensions import ParamSpec

import stdiocontext.context
from stdiocontext.exception import UsageError

if TYPE_CHECKING:
    from stdiocontext.context import StdioContext

P = ParamSpec("P")
T = TypeVar("T")


class CompletionStyle(enum.Enum):
    #: Detect callbacks, futures and awaitables by their shape
    AUTO = "auto"
    #: Done on return or exception, like wrap_sync()
    RETURN = "return"
    #: Done when the callback given as the last positional argument is called
    CALLBACK = "callback"
    #: Done when the returned future or awaitable settles
    AWAITABLE = "awaitable"


def _describe(func: object) -> str:
    return getattr(func, "__qualname__", None) or repr(func)


def _check(context: object, func: object, name: str) -> None:
    # Raised here since errors would otherwise only show up once the wrapper is called
    if not isinstance(context, stdiocontext.context.StdioContext):
        raise UsageError(f"{name} must be called on a StdioContext")
    if not callable(func):
        raise UsageError(f"func must be callable, not {type(func).__name__}")


def is_future(value: object) -> bool:
    return callable(getattr(value, "add_done_callback", None))


def _chain_future(source: Any, exit_once: Callable[[], None]) -> Any:
    """
    Returns a future which settles like ``source``, once ``exit_once`` has been
    called.  An error raised by ``exit_once`` becomes the exception of the
    returned future.
    """
    if asyncio.isfuture(source):
        target = source.get_loop().create_future()
    else:
        target = concurrent.futures.Future()

    def _source_done(source: Any) -> None:
        try:
            exit_once()
        except Exception as exc:
            if not source.cancelled() and source.exception() is not None:
                exc.__context__ = source.exception()
            if not target.done():
                target.set_exception(exc)
            return

        if target.done():
            return
        if source.cancelled():
            target.cancel()
        elif source.exception() is not None:
            target.set_exception(source.exception())
        else:
            target.set_result(source.result())

    def _target_done(target: Any) -> None:
        if target.cancelled():
            source.cancel()

    target.add_done_callback(_target_done)
    source.add_done_callback(_source_done)
    return target


async def _settle(awaitable: Awaitable[T], exit_once: Callable[[], None]) -> T:
    try:
        return await awaitable
    finally:
        exit_once()


def wrap(
    context: StdioContext,
    func: Callable[P, T],
    style: CompletionStyle = CompletionStyle.AUTO,
) -> Callable[P, T]:
    """
    Wraps a function, which may be synchronous or asynchronous, so that it
    runs in ``context``.

    The context is entered when the wrapper is called and exited once:

    - when the function raises an exception,
    - when the function returns, if it did not return a future or awaitable
      and its last positional argument was not callable,
    - when a future returned by the function is done, or an awaitable
      returned by it has been awaited,
    - when the callable passed as the last positional argument is called.

    Futures (anything with ``add_done_callback``) are returned chained to a
    new future of the same kind, which settles after the context has exited.
    Other awaitables, e.g. coroutines, are returned wrapped in a coroutine
    which must be awaited for the context to exit.  Either way an error raised
    by exiting a strict context is raised by the returned future or awaitable.

    ``style`` restricts which of these are considered, for functions whose
    last argument is callable without being a completion callback, or which
    must complete through a callback or awaitable.
    """
    _check(context, func, "wrap")
    if not isinstance(style, CompletionStyle):
        raise UsageError(f"style must be a CompletionStyle, not {style!r}")
    if style is CompletionStyle.RETURN:
        return wrap_sync(context, func)

    @functools.wraps(func)
    def _stdio_wrapped(*args: P.args, **kwargs: P.kwargs) -> T:
        exited = False

        def exit_once() -> None:
            nonlocal exited
            if not exited:
                exited = True
                context.exit()

        has_callback = False
        if style is not CompletionStyle.AWAITABLE and args and callable(args[-1]):
            callback = args[-1]

            def _stdio_wrapped_callback(*cb_args: Any, **cb_kwargs: Any) -> Any:
                exit_once()
                return callback(*cb_args, **cb_kwargs)

            args = args[:-1] + (_stdio_wrapped_callback,)  # type: ignore[assignment]
            has_callback = True
        elif style is CompletionStyle.CALLBACK:
            raise UsageError(f"{_describe(func)} must be called with a callback as last argument")

        context.enter()

        try:
            result = func(*args, **kwargs)
        except BaseException:
            exit_once()
            raise

        if style is not CompletionStyle.CALLBACK:
            if is_future(result):
                return _chain_future(result, exit_once)
            if inspect.isawaitable(result):
                return _settle(result, exit_once)  # type: ignore[return-value]
            if style is CompletionStyle.AWAITABLE:
                exit_once()
                raise UsageError(f"{_describe(func)} did not return a future or awaitable")

        if not has_callback:
            exit_once()

        return result

    return _stdio_wrapped


def wrap_sync(context: StdioContext, func: Callable[P, T]) -> Callable[P, T]:
    """
    Wraps a synchronous function so that it runs in ``context``, which is
    exited when the function returns or raises.  Callbacks and returned
    awaitables get no special treatment.
    """
    _check(context, func, "wrap_sync")

    @functools.wraps(func)
    def _stdio_wrapped_sync(*args: P.args, **kwargs: P.kwargs) -> T:
        context.enter()
        try:
            return func(*args, **kwargs)
        finally:
            context.exit()

    return _stdio_wrapped_sync
