from .scheduler import Scheduler
