"""
validator — walidator modelu (assembly + maszyna sterująca) przed rozwiązaniem.

Interfejs publiczny:
    ModelValidator — główny walidator (etapy A–E)
    MODEL_SCHEMA   — JSON Schema dokumentu modelu
    ValidationReport, ValidationError, ErrorCode — typy raportu

Typowe użycie:
    from validator import ModelValidator

    validator = ModelValidator()
    report    = validator.validate(machine)
    if not report.is_valid:
        for e in report.errors:
            print(e.code, e.path, e.message)
"""

from .types import ErrorCode, ValidationError, ValidationReport
from .schema import MODEL_SCHEMA
from .model_validator import MAX_ERRORS, ModelValidator

__all__ = [
    "ErrorCode",
    "ValidationError",
    "ValidationReport",
    "MODEL_SCHEMA",
    "MAX_ERRORS",
    "ModelValidator",
]
