from .privilege_policy import PrivilegePolicy

__all__ = ["PrivilegePolicy"]
