"""Dealer service: wraps the hand evaluator with a WebSocket JSON API."""

from .history import AccessHistory, HistoryItem
from .models import DealerConfig
from .server import DealerError, DealerServer

__all__ = ["AccessHistory", "HistoryItem", "DealerConfig", "DealerError", "DealerServer"]
