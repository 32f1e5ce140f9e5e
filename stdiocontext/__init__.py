from __future__ import annotations

# isort: off
import stdiocontext.lib.config

config: stdiocontext.lib.config.Config = stdiocontext.lib.config.Config()
# isort: on

import stdiocontext.color
import stdiocontext.lib.version
import stdiocontext.log
from stdiocontext.console import Console
from stdiocontext.context import UNCHANGED
from stdiocontext.context import StdioContext
from stdiocontext.environment import Environment
from stdiocontext.environment import process_environment
from stdiocontext.exception import ConfigurationError
from stdiocontext.exception import ExitDisciplineError
from stdiocontext.exception import StdioContextError
from stdiocontext.exception import UsageError
from stdiocontext.wrappers import CompletionStyle

__version__ = stdiocontext.lib.version.__version__
version = __version__

__all__ = [
    "CompletionStyle",
    "ConfigurationError",
    "Console",
    "Environment",
    "ExitDisciplineError",
    "StdioContext",
    "StdioContextError",
    "UNCHANGED",
    "UsageError",
    "config",
    "process_environment",
]
