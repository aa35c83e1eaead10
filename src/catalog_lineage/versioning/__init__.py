"""Versioning module initialization."""

from .selector import VersionSelector, SelectorState
from .session import LineageSession, FetchTicket, ViewState, EMPTY_STATE_MESSAGE

__all__ = [
    "VersionSelector", "SelectorState", "LineageSession", "FetchTicket", "ViewState",
    "EMPTY_STATE_MESSAGE"
]
