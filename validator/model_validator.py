"""
validator/model_validator.py — walidator modelu przed uruchomieniem solvera.

ModelValidator.validate_document(doc) -> ValidationReport   (etap A)
ModelValidator.validate(machine)      -> ValidationReport   (etapy B–E)

Etapy:
  A — JSON Schema               (dokument modelu, jsonschema Draft 2020-12)
  B — maszyny składowe          (pseudostan, unikalne stany, przejścia)
  C — maszyna sterująca         (te same reguły strukturalne)
  D — strażniki i ograniczenia  (atomy wskazują maszyny assembly)
  E — akcje                     (maszyna istnieje, zdarzenie ma przejścia)
"""

from __future__ import annotations

from collections import Counter
from typing import Any

import jsonschema

from algebra.propositions import Atom, Proposition, TrueProp, atoms
from data_model.assembly import Assembly
from data_model.control import ControlMachine
from data_model.machines import Machine

from .schema import MODEL_SCHEMA
from .types import ErrorCode, ValidationError, ValidationReport

# Limit błędów: po przekroczeniu przerywamy dalsze etapy
MAX_ERRORS = 20


class ModelValidator:
    """
    Walidator modelu (assembly + maszyna sterująca).

    Użycie:
        validator = ModelValidator()
        report    = validator.validate_document(doc)
        if report.is_valid:
            report = validator.validate(load_model(doc))
    """

    def __init__(self, schema: dict[str, Any] | None = None) -> None:
        self._schema = schema if schema is not None else MODEL_SCHEMA

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def validate_document(self, doc: Any) -> ValidationReport:
        """Etap A: zgodność dokumentu z MODEL_SCHEMA."""
        errors: list[ValidationError] = []
        self._stage_schema(doc, errors)
        return ValidationReport(is_valid=not errors, errors=errors)

    def validate(self, machine: ControlMachine) -> ValidationReport:
        """Etapy B–E na zbudowanym modelu."""
        errors: list[ValidationError] = []
        warnings: list[str] = []
        assembly = machine.assembly

        # B: maszyny składowe
        for mid, component in assembly.machines.items():
            self._stage_component(mid, component, errors, warnings)

        # C: maszyna sterująca
        if len(errors) < MAX_ERRORS:
            self._stage_control(machine, errors)

        # D: strażniki i ograniczenia
        if len(errors) < MAX_ERRORS:
            self._stage_guards(machine, errors, warnings)

        # E: akcje
        if len(errors) < MAX_ERRORS:
            self._stage_actions(machine, errors)

        return ValidationReport(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Stage A: JSON Schema
    # ------------------------------------------------------------------

    def _stage_schema(self, doc: Any, errors: list[ValidationError]) -> None:
        validator = jsonschema.Draft202012Validator(self._schema)
        for e in sorted(validator.iter_errors(doc), key=lambda e: list(map(str, e.absolute_path))):
            path = (
                "/" + "/".join(str(p) for p in e.absolute_path)
                if e.absolute_path
                else "/"
            )
            errors.append(ValidationError(
                code=ErrorCode.SCHEMA_VIOLATION,
                path=path,
                message=e.message,
                expected_fix=f"Popraw naruszenie schematu JSON na ścieżce {path}.",
            ))

    # ------------------------------------------------------------------
    # Stage B: maszyny składowe
    # ------------------------------------------------------------------

    def _stage_component(
        self,
        mid: str,
        machine: Machine,
        errors: list[ValidationError],
        warnings: list[str],
    ) -> None:
        path = f"/machines/{mid}"
        self._check_pseudostates(
            path, mid, sum(1 for s in machine.states if s.pseudo), errors,
        )
        self._check_duplicates(path, mid, [s.name for s in machine.states], errors)

        names = {s.name for s in machine.states}
        for i, t in enumerate(machine.transitions):
            for end in (t.source, t.target):
                if end not in names:
                    errors.append(ValidationError(
                        code=ErrorCode.UNKNOWN_STATE,
                        path=f"{path}/transitions/{i}",
                        message=f"Przejście {t} maszyny '{mid}' wskazuje nieznany stan '{end}'.",
                        expected_fix=f"Dodaj stan '{end}' do maszyny '{mid}' lub popraw przejście.",
                        details={"machine": mid, "state": end},
                    ))

        if machine.pseudostate is not None and not machine.initial_states():
            warnings.append(f"Maszyna '{mid}' nie ma stanów początkowych.")

    # ------------------------------------------------------------------
    # Stage C: maszyna sterująca
    # ------------------------------------------------------------------

    def _stage_control(self, machine: ControlMachine, errors: list[ValidationError]) -> None:
        path = "/control"
        self._check_pseudostates(
            path, machine.name, sum(1 for s in machine.states if s.pseudo), errors,
        )
        self._check_duplicates(path, machine.name, [s.name for s in machine.states], errors)

        for i, t in enumerate(machine.transitions):
            for end in (t.source, t.target):
                if not any(end is s for s in machine.states):
                    errors.append(ValidationError(
                        code=ErrorCode.UNKNOWN_STATE,
                        path=f"{path}/transitions/{i}",
                        message=(
                            f"Przejście {t!r} maszyny sterującej '{machine.name}' "
                            f"wskazuje stan '{end.name}' spoza grafu."
                        ),
                        expected_fix=f"Dodaj stan '{end.name}' do maszyny sterującej.",
                        details={"machine": machine.name, "state": end.name},
                    ))

    # ------------------------------------------------------------------
    # Stage D: strażniki i ograniczenia
    # ------------------------------------------------------------------

    def _stage_guards(
        self,
        machine: ControlMachine,
        errors: list[ValidationError],
        warnings: list[str],
    ) -> None:
        assembly = machine.assembly
        for i, t in enumerate(machine.transitions):
            path = f"/control/transitions/{i}/guard"
            self._check_atoms(t.guard, path, assembly, errors, warnings)
            reactive = not t.is_triggerable and not t.source.pseudo
            if reactive and not isinstance(t.guard, (TrueProp, Atom)):
                warnings.append(
                    f"Przejście reaktywne {t!r}: strażnik '{t.guard}' nie jest TRUE "
                    f"ani pojedynczym atomem, więc nie pochłonie żadnej strefy wyjścia."
                )

        for i, state in enumerate(machine.states):
            if state.constraints is not None:
                path = f"/control/states/{i}/constraints"
                self._check_atoms(state.constraints, path, assembly, errors, warnings)

    def _check_atoms(
        self,
        prop: Proposition,
        path: str,
        assembly: Assembly,
        errors: list[ValidationError],
        warnings: list[str],
    ) -> None:
        for atom in sorted(atoms(prop)):
            component = assembly.machines.get(atom.machine_id)
            if component is None:
                errors.append(ValidationError(
                    code=ErrorCode.UNKNOWN_MACHINE,
                    path=path,
                    message=(
                        f"Atom '{atom}' wskazuje maszynę '{atom.machine_id}' "
                        f"spoza assembly '{assembly.assembly_id}'."
                    ),
                    expected_fix=f"Użyj jednej z maszyn: {', '.join(assembly.machines)}.",
                    details={"machine": atom.machine_id, "assembly": assembly.assembly_id},
                ))
            elif atom.state_name not in component.state_names():
                warnings.append(
                    f"{path}: atom '{atom}' wskazuje nieznany stan maszyny "
                    f"'{atom.machine_id}', więc nigdy nie jest prawdziwy."
                )

    # ------------------------------------------------------------------
    # Stage E: akcje
    # ------------------------------------------------------------------

    def _stage_actions(self, machine: ControlMachine, errors: list[ValidationError]) -> None:
        assembly = machine.assembly
        for i, t in enumerate(machine.transitions):
            for j, action in enumerate(t.actions):
                path      = f"/control/transitions/{i}/actions/{j}"
                component = assembly.machines.get(action.machine_id)
                if component is None:
                    errors.append(ValidationError(
                        code=ErrorCode.UNKNOWN_MACHINE,
                        path=path,
                        message=(
                            f"Akcja '{action}' wskazuje maszynę '{action.machine_id}' "
                            f"spoza assembly '{assembly.assembly_id}'."
                        ),
                        expected_fix=f"Użyj jednej z maszyn: {', '.join(assembly.machines)}.",
                        details={"machine": action.machine_id, "assembly": assembly.assembly_id},
                    ))
                elif not component.transitions_for_event(action.event):
                    errors.append(ValidationError(
                        code=ErrorCode.UNKNOWN_EVENT,
                        path=path,
                        message=(
                            f"Maszyna '{action.machine_id}' nie ma przejść "
                            f"wyzwalanych zdarzeniem '{action.event}'."
                        ),
                        expected_fix=(
                            f"Użyj zdarzenia z listy: "
                            f"{', '.join(component.events()) or '(brak)'}."
                        ),
                        details={"machine": action.machine_id, "event": action.event},
                    ))

    # ------------------------------------------------------------------
    # Wspólne sprawdzenia strukturalne
    # ------------------------------------------------------------------

    @staticmethod
    def _check_pseudostates(
        path: str,
        name: str,
        count: int,
        errors: list[ValidationError],
    ) -> None:
        if count == 0:
            errors.append(ValidationError(
                code=ErrorCode.MISSING_PSEUDOSTATE,
                path=path,
                message=f"Maszyna '{name}' nie ma pseudostanu.",
                expected_fix=f"Dodaj pseudostan do maszyny '{name}'.",
                details={"machine": name},
            ))
        elif count > 1:
            errors.append(ValidationError(
                code=ErrorCode.MULTIPLE_PSEUDOSTATES,
                path=path,
                message=f"Maszyna '{name}' ma {count} pseudostany (dozwolony jeden).",
                expected_fix=f"Pozostaw jeden pseudostan w maszynie '{name}'.",
                details={"machine": name, "count": count},
            ))

    @staticmethod
    def _check_duplicates(
        path: str,
        name: str,
        state_names: list[str],
        errors: list[ValidationError],
    ) -> None:
        for state, n in Counter(state_names).items():
            if n > 1:
                errors.append(ValidationError(
                    code=ErrorCode.DUPLICATE_STATE,
                    path=f"{path}/states",
                    message=f"Stan '{state}' występuje {n} razy w maszynie '{name}'.",
                    expected_fix=f"Nadaj stanom maszyny '{name}' unikalne nazwy.",
                    details={"machine": name, "state": state},
                ))
