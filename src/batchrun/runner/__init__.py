"""
Batch scheduling and the interactive session loop.
"""
from .scheduler import PendingQueue, Scheduler
from .session import Session

__all__ = ["PendingQueue", "Scheduler", "Session"]
