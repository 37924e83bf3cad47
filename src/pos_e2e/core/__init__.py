"""Core harness state: exceptions, session and setup/teardown lifecycle."""

from pos_e2e.core.exceptions import (
    ApiConnectionError,
    PosE2EError,
    SetupError,
)
from pos_e2e.core.session import ApiSession, TrackedIds

__all__ = [
    "ApiConnectionError",
    "ApiSession",
    "PosE2EError",
    "SetupError",
    "TrackedIds",
]
