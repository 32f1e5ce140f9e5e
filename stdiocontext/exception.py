from __future__ import annotations


class StdioContextError(Exception):
    """Base class for errors raised by stdiocontext."""


class ConfigurationError(StdioContextError, TypeError):
    """
    The options given to :class:`~stdiocontext.context.StdioContext` are not
    usable, e.g. they are not a mapping or a stream lacks ``read``/``write``.
    """


class UsageError(StdioContextError, TypeError):
    """A wrapper was requested on something which is not a StdioContext, or
    for something which is not callable."""


class ExitDisciplineError(StdioContextError, RuntimeError):
    """
    Raised by strict contexts when ``exit()`` is not paired with ``enter()``,
    or when a stream was modified outside of the context before it exited.
    """
