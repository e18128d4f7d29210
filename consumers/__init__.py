from consumers.base import OutcomeConsumer
from consumers.console import ConsoleConsumer

__all__ = ["OutcomeConsumer", "ConsoleConsumer"]
