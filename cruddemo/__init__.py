from ._version import __version__
from .entities import Employee, Entity, Student
from .patch import apply_patch
from .repository import InMemoryRepository, Repository
from .service import CrudService

__all__ = [
    "CrudService",
    "Employee",
    "Entity",
    "InMemoryRepository",
    "Repository",
    "Student",
    "__version__",
    "apply_patch",
]
