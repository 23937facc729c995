from .catalog import DEFAULT_DELAYS_MS, TaskCatalog
from .types import CatalogError, InvalidTaskIndex, TaskDefinition

__all__ = [
    "DEFAULT_DELAYS_MS",
    "TaskCatalog",
    "TaskDefinition",
    "CatalogError",
    "InvalidTaskIndex",
]
