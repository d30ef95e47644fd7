"""chorething - Watch a Grocy instance for overdue chores."""

from chorething.config import Config, load_config, save_config
from chorething.errors import (
    ChoreThingError,
    ConfigError,
    DecodeError,
    HTTPStatusError,
    ParseError,
    TransportError,
)
from chorething.evaluator import evaluate
from chorething.grocy import GrocyClient, overview_url
from chorething.models import AutoCheck, Chore, CycleOutcome, EngineState, PollResult, User
from chorething.poller import Poller

__version__ = "0.1.0"
__all__ = [
    "Poller",
    "GrocyClient",
    "evaluate",
    "overview_url",
    "Config",
    "load_config",
    "save_config",
    "Chore",
    "User",
    "PollResult",
    "CycleOutcome",
    "EngineState",
    "AutoCheck",
    "ChoreThingError",
    "TransportError",
    "HTTPStatusError",
    "DecodeError",
    "ParseError",
    "ConfigError",
]
