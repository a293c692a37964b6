# kaloltsavam/apps/results/importer.py
"""
Carga masiva de resultados (CSV / Excel).

Flujo:
  1) decode_upload   → filas crudas (dict cabecera → texto)
  2) validate_rows   → ValidatedRow o Rejected por fila; ImportPreview
  3) commit_rows     → una escritura por fila válida, en orden, sin transacción

Columnas esperadas: participantId, name, event, score, rank
(category es opcional y se conserva si viene).
"""
from __future__ import annotations

import csv
import io
import logging
import re
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, time
from pathlib import PurePath
from typing import Any, BinaryIO, Callable, Dict, Iterable, List, Optional, Tuple, Union

from openpyxl import load_workbook
import xlrd

from .exceptions import DecodeError, RowError, StoreWriteError, UnsupportedFormat
from .store import create_result

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = ("csv",)
SPREADSHEET_EXTENSIONS = ("xlsx", "xls")
ACCEPTED_EXTENSIONS = CSV_EXTENSIONS + SPREADSHEET_EXTENSIONS

EXPECTED_COLUMNS = ["participantId", "name", "event", "score", "rank"]

RawRow = Dict[str, str]

_INT_RE = re.compile(r"[+-]?[0-9]+")


# ======================
# Tipos
# ======================

@dataclass(frozen=True)
class ValidatedRow:
    participant_id: str
    name: str
    event: str
    score: str
    rank: int
    category: str = ""

    def to_result_data(self) -> Dict[str, Any]:
        return {
            "participant_id": self.participant_id,
            "participant_name": self.name,
            "event": self.event,
            "category": self.category,
            "time": self.score,
            "rank": self.rank,
        }

    def to_session(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_session(cls, data: Dict[str, Any]) -> "ValidatedRow":
        return cls(**data)


@dataclass(frozen=True)
class Rejected:
    index: int
    messages: Tuple[str, ...]

    def as_row_error(self) -> RowError:
        return RowError(index=self.index, messages=list(self.messages))


@dataclass
class ImportPreview:
    valid: List[ValidatedRow] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)
    total: int = 0

    @property
    def messages(self) -> List[str]:
        return [m for e in self.errors for m in e.messages]

    @property
    def can_preview(self) -> bool:
        # Todas las filas inválidas → se queda en la etapa de carga.
        # Archivo vacío (0 filas, 0 errores) sí avanza con 0 registros.
        return bool(self.valid) or not self.errors


@dataclass
class CommitReport:
    created: int = 0
    failures: List[Tuple[int, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


# ======================
# Decodificación
# ======================

def file_extension(filename: str) -> str:
    return PurePath(filename or "").suffix.lower().lstrip(".")


def _cell_to_str(value: Any) -> str:
    """
    openpyxl/xlrd devuelven tipos nativos:
    - None → ""
    - float entero → "1" (no "1.0"), para que rank siga siendo entero
    - fechas → ISO (medianoche → solo la fecha)
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time.min:
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _rows_from_matrix(header: Iterable[Any], rows: Iterable[Iterable[Any]]) -> List[RawRow]:
    headers = [_cell_to_str(h).strip() for h in header]
    out: List[RawRow] = []
    for cells in rows:
        values = [_cell_to_str(v) for v in cells]
        if not any(v.strip() for v in values):
            continue  # fila vacía
        out.append({h: v for h, v in zip(headers, values) if h})
    return out


def _decode_csv(data: bytes) -> List[RawRow]:
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"CSV parsing error: {exc}") from exc

    reader = csv.DictReader(io.StringIO(text, newline=""), strict=True)
    out: List[RawRow] = []
    try:
        for row in reader:
            out.append({
                (k or "").strip(): ("" if v is None else v)
                for k, v in row.items()
                if k is not None and (k or "").strip()
            })
    except csv.Error as exc:
        raise DecodeError(f"CSV parsing error: {exc}") from exc
    return out


def _decode_xlsx(data: bytes) -> List[RawRow]:
    try:
        wb = load_workbook(filename=io.BytesIO(data), read_only=True, data_only=True)
    except Exception as exc:
        raise DecodeError(f"Excel parsing error: {exc}") from exc
    try:
        ws = wb.worksheets[0]  # solo la primera hoja
        # read_only: las hojas se parsean recién al iterar
        rows = ws.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return []
        return _rows_from_matrix(header, rows)
    except Exception as exc:
        raise DecodeError(f"Excel parsing error: {exc}") from exc
    finally:
        wb.close()


def _xls_cell_value(cell: "xlrd.sheet.Cell", datemode: int) -> Any:
    """xlrd entrega fechas como número de serie y booleanos como 0/1."""
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    return cell.value


def _decode_xls(data: bytes) -> List[RawRow]:
    try:
        book = xlrd.open_workbook(file_contents=data)
        sheet = book.sheet_by_index(0)
        if sheet.nrows == 0:
            return []
        header = [_xls_cell_value(c, book.datemode) for c in sheet.row(0)]
        body = ([_xls_cell_value(c, book.datemode) for c in sheet.row(r)] for r in range(1, sheet.nrows))
        return _rows_from_matrix(header, body)
    except Exception as exc:
        raise DecodeError(f"Excel parsing error: {exc}") from exc


def decode_upload(fileobj: Union[BinaryIO, bytes], filename: str) -> List[RawRow]:
    """
    Lee el archivo completo en memoria y devuelve filas crudas.
    Extensión desconocida → UnsupportedFormat (sin leer el contenido).
    """
    ext = file_extension(filename)
    if ext not in ACCEPTED_EXTENSIONS:
        raise UnsupportedFormat(ext)

    data = fileobj if isinstance(fileobj, bytes) else fileobj.read()

    if ext in CSV_EXTENSIONS:
        return _decode_csv(data)
    if ext == "xlsx":
        return _decode_xlsx(data)
    return _decode_xls(data)


# ======================
# Validación
# ======================

def _text(raw: RawRow, key: str) -> str:
    value = raw.get(key)
    return "" if value is None else str(value).strip()


def parse_rank(value: str) -> Optional[int]:
    """Entero base 10 (signo opcional). Sin validar rango: 0 y negativos se aceptan."""
    value = (value or "").strip()
    if not _INT_RE.fullmatch(value):
        return None
    return int(value, 10)


def validate_row(raw: RawRow, index: int) -> Union[ValidatedRow, Rejected]:
    """
    Corre TODAS las reglas (no corta en la primera) para reportar cada campo.
    index es 1-based sobre las filas decodificadas.
    """
    participant_id = _text(raw, "participantId")
    name = _text(raw, "name")
    event = _text(raw, "event")
    score = _text(raw, "score")
    rank = parse_rank(_text(raw, "rank"))

    errors: List[str] = []
    if not participant_id:
        errors.append(f"Row {index}: Participant ID is required")
    if not name:
        errors.append(f"Row {index}: Name is required")
    if not event:
        errors.append(f"Row {index}: Event is required")
    if not score:
        errors.append(f"Row {index}: Score is required")
    if rank is None:
        errors.append(f"Row {index}: Valid rank number is required")

    if errors:
        return Rejected(index=index, messages=tuple(errors))

    return ValidatedRow(
        participant_id=participant_id,
        name=name,
        event=event,
        score=score,
        rank=rank,
        category=_text(raw, "category"),
    )


def validate_rows(raw_rows: List[RawRow]) -> ImportPreview:
    preview = ImportPreview(total=len(raw_rows))
    for index, raw in enumerate(raw_rows, start=1):
        outcome = validate_row(raw, index)
        if isinstance(outcome, Rejected):
            preview.errors.append(outcome.as_row_error())
        else:
            preview.valid.append(outcome)
    return preview


def build_preview(fileobj: Union[BinaryIO, bytes], filename: str) -> ImportPreview:
    """decode + validate. UploadError (formato / parseo) se propaga."""
    raw_rows = decode_upload(fileobj, filename)
    preview = validate_rows(raw_rows)
    logger.info(
        "Upload %s: %d rows decoded, %d valid, %d rejected",
        filename, preview.total, len(preview.valid), len(preview.errors),
    )
    return preview


# ======================
# Commit
# ======================

def commit_rows(
    rows: List[ValidatedRow],
    create: Callable[[Dict[str, Any]], Any] = create_result,
) -> CommitReport:
    """
    Una escritura por fila, en orden. No hay transacción que abarque el lote:
    si la fila k falla, las filas 1..k-1 quedan guardadas y el resto se intenta igual.
    Las fallas se devuelven con su posición (1-based dentro del preview).
    """
    report = CommitReport()
    for position, row in enumerate(rows, start=1):
        try:
            create(row.to_result_data())
        except StoreWriteError as exc:
            logger.warning("Import row %d (%s) failed: %s", position, row.participant_id, exc)
            report.failures.append((position, str(exc)))
        else:
            report.created += 1
    logger.info("Import committed: %d created, %d failed", report.created, len(report.failures))
    return report
