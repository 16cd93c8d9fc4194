"""ASE (Atomic Simulation Environment) adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from ..system import Box, Configuration

if TYPE_CHECKING:
    from ase import Atoms as AtomsType

# Optional ASE import
try:
    from ase import Atoms
    from ase.io import read as ase_read

    HAS_ASE = True
except ImportError:
    HAS_ASE = False


def check_ase() -> None:
    """Check if ASE is available."""
    if not HAS_ASE:
        raise ImportError("ASE required: pip install ase")


class ASEAdapter:
    """
    Adapter for converting between Configuration and ASE Atoms objects.

    ASE provides file readers for most structure formats and its own
    neighbour search, both of which can feed a neighbour list build.

    Example:
        adapter = ASEAdapter()

        atoms = adapter.to_ase(config)
        config = adapter.from_ase(atoms)
    """

    def __init__(self, default_species: str = "X") -> None:
        """
        Initialize ASE adapter.

        Args:
            default_species: Symbol used for sites without species.
        """
        check_ase()
        self.default_species = default_species

    def to_ase(self, config: Configuration) -> AtomsType:
        """
        Convert a Configuration to an ASE Atoms object.

        Args:
            config: Configuration to convert.

        Returns:
            ASE Atoms object with the same positions, cell and periodicity.
        """
        if config.species is not None:
            symbols = list(config.species)
        else:
            symbols = [self.default_species] * config.size

        atoms = Atoms(symbols=symbols, positions=np.array(config.positions))

        if config.box is not None:
            atoms.set_cell(np.array(config.box.vectors))
            atoms.set_pbc(config.box.pbc)

        return atoms

    def from_ase(self, atoms: AtomsType) -> Configuration:
        """
        Convert an ASE Atoms object to a Configuration.

        Args:
            atoms: ASE Atoms object.

        Returns:
            Configuration with a Box when the atoms carry a cell or periodicity.
        """
        pbc = tuple(bool(p) for p in atoms.get_pbc())
        vectors = np.array(atoms.get_cell()[:], dtype=np.float64)

        box = None
        if any(pbc) or np.any(vectors):
            box = Box(vectors, pbc=pbc)

        return Configuration.create(
            positions=atoms.get_positions(),
            box=box,
            species=atoms.get_chemical_symbols(),
        )


def read_configuration(
    filename: str, index: int | str = -1, **kwargs
) -> list[Configuration]:
    """
    Read structure(s) using ASE's universal reader.

    ASE supports many formats: xyz, pdb, cif, vasp, extxyz, etc.

    Args:
        filename: Input file path.
        index: Frame index or slice string (e.g., ":", "-1", "0:10").
        **kwargs: Additional arguments passed to ase.io.read.

    Returns:
        List of configurations.
    """
    check_ase()

    atoms_list = ase_read(filename, index=index, **kwargs)

    # Ensure it's a list
    if not isinstance(atoms_list, list):
        atoms_list = [atoms_list]

    adapter = ASEAdapter()
    return [adapter.from_ase(atoms) for atoms in atoms_list]
