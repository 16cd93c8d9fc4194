"""Structure input via ASE."""

from .ase_adapter import HAS_ASE, ASEAdapter, check_ase, read_configuration

__all__ = ["HAS_ASE", "ASEAdapter", "check_ase", "read_configuration"]
