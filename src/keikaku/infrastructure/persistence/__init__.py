# Infrastructure Persistence Package
from .in_memory import InMemoryUserRepository
from .json_file import FileUserRepository
from .serialization import user_from_dict, user_to_dict

__all__ = ["InMemoryUserRepository", "FileUserRepository", "user_from_dict", "user_to_dict"]
