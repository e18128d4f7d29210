from core.classifier import classify
from core.event_bus import EventBus
from core.locks import KeyedLock
from core.refresh import StatusRefreshService
from core.registry import FetcherRegistry
from core.scheduler import Scheduler

__all__ = [
    "EventBus",
    "FetcherRegistry",
    "KeyedLock",
    "Scheduler",
    "StatusRefreshService",
    "classify",
]
