"""Spork: cookbook version promotion for chef environments.

Pins a cookbook's version into one or more environment manifests,
reports the constraint diff, saves the manifest locally and optionally
uploads it and notifies paste, chat and metrics channels.
"""

__version__ = "0.5.0"
__description__ = "Promote cookbook versions into chef environment manifests"

from spork.core.orchestrator import PromotionOrchestrator
from spork.cli.app import app as cli

__all__ = ["PromotionOrchestrator", "cli", "__version__"]
