from enum import Enum, auto


class LifecycleState(Enum):
    RUNNING = auto()
    DRAINING = auto()
    STOPPED = auto()
