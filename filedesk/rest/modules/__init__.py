from .file_module import file_module
from .profile_module import profile_module

ALL_MODULES = [file_module, profile_module]

__all__ = ["ALL_MODULES", "file_module", "profile_module"]
