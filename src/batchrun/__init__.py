"""
Batch command runner: run command lines serially or in parallel from the
console, a script file, or a script fetched over the network.
"""
from .config import load_config
from .runner.scheduler import Scheduler
from .runner.session import Session

__all__ = ["load_config", "Scheduler", "Session"]
