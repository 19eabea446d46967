"""
solver/universe.py — enumeracja uniwersum i konfiguracji początkowych assembly.
"""

from __future__ import annotations

from data_model.assembly import Assembly

from .configuration import Configuration


def generate_universe(assembly: Assembly) -> list[Configuration]:
    """Jedna pełna konfiguracja na każdą kombinację stanów logicznych maszyn."""
    return [
        Configuration.from_mapping(assembly.assembly_id, assignment)
        for assignment in assembly.iter_assignments()
    ]


def initial_configurations(assembly: Assembly) -> list[Configuration]:
    """Iloczyn stanów początkowych każdej maszyny."""
    return [
        Configuration.from_mapping(assembly.assembly_id, assignment)
        for assignment in assembly.iter_initial_assignments()
    ]
