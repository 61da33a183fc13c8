"""
Shared context object for relver CLI commands.

The group callback in :mod:`relver.cli` fills one :class:`RelverContext`
per invocation; subcommands receive it through :data:`pass_context`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from relver.config import RelverConfig


class RelverContext:
    """Per-invocation state shared by relver commands.

    Attributes:
        config_path: Configuration file that was loaded, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration, or ``None`` when a command runs
            outside the ``relver`` group (e.g. invoked directly in tests).
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[RelverConfig] = None

    @property
    def effective_config(self) -> RelverConfig:
        """The loaded configuration, falling back to defaults."""
        if self.config is None:
            self.config = RelverConfig()
        return self.config


#: Click decorator injecting :class:`RelverContext` into commands.
pass_context = click.make_pass_decorator(RelverContext, ensure=True)
