from .controller import LifecycleController
from .types import LifecycleState

__all__ = ["LifecycleController", "LifecycleState"]
