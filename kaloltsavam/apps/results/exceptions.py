# kaloltsavam/apps/results/exceptions.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


class ResultsError(Exception):
    """Base de errores del módulo de resultados."""


class UploadError(ResultsError):
    """Error fatal para un intento de carga: se detiene y se reporta una sola vez."""


class UnsupportedFormat(UploadError):
    def __init__(self, extension: str = ""):
        self.extension = extension
        super().__init__("Unsupported file format. Please upload a CSV or Excel file.")


class DecodeError(UploadError):
    """CSV o libro Excel malformado; el mensaje viene del parser."""


class StoreError(ResultsError):
    pass


class StoreReadError(StoreError):
    pass


class StoreWriteError(StoreError):
    pass


@dataclass
class RowError:
    """Mensajes de validación de una fila (índice 1-based, nunca se renumera)."""
    index: int
    messages: List[str] = field(default_factory=list)
