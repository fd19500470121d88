"""
cmdtree CLI Framework

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .command import CalledAs, Command, MaxLengths
from .defaults import DefaultFlagRegistry
from .dispatcher import Dispatcher
from .flags import Flag, FlagAction, FlagSet, ParseErrorsAllowlist
from .lifecycle import Lifecycle, LifecycleEvent, LifecycleExecutor
from .logger import logger
from .scope import FlagScope
from .streams import Streams
from .suggestions import SuggestionEngine
from .version import __version__

__all__ = [
    "CalledAs",
    "Command",
    "DefaultFlagRegistry",
    "Dispatcher",
    "Flag",
    "FlagAction",
    "FlagScope",
    "FlagSet",
    "Lifecycle",
    "LifecycleEvent",
    "LifecycleExecutor",
    "MaxLengths",
    "ParseErrorsAllowlist",
    "Streams",
    "SuggestionEngine",
    "logger",
    "__version__",
]
