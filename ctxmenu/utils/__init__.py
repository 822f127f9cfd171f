"""
Utilities package: settings constants, the frame-driven scheduler,
logging setup and crash reporting.
"""
from .scheduler import Scheduler, TimerHandle

__all__ = ["Scheduler", "TimerHandle"]
