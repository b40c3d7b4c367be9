"""Application state container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .rpc import ChainClient
from .settings import ValuerSettings


@dataclass
class AppState:
    """Container for application-wide state and dependencies.

    Passed through the pipeline to avoid global state and enable testing.
    """

    settings: ValuerSettings
    logger: logging.Logger
    client: ChainClient
