# kaloltsavam/apps/results/query.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional

from .models import Result
from .store import query_results

logger = logging.getLogger(__name__)


def _param(params: Mapping[str, str], name: str) -> Optional[str]:
    value = (params.get(name) or "").strip()
    return value or None


@dataclass(frozen=True)
class ResultQuery:
    """Filtros opcionales; un filtro ausente (None) no restringe nada. Se combinan con AND."""
    search: Optional[str] = None
    event: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "ResultQuery":
        # Acepta ?search= (API) y ?q= (formulario HTML)
        return cls(
            search=_param(params, "search") or _param(params, "q"),
            event=_param(params, "event"),
            category=_param(params, "category"),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.search or self.event or self.category)


def search_results(query: ResultQuery) -> List[Result]:
    """
    Cada llamada es una lectura nueva (sin caché ni reintentos).
    StoreReadError se propaga al llamador.
    """
    logger.info("Fetching results with filters: search=%r event=%r category=%r", query.search, query.event, query.category)
    results = query_results(search=query.search, event=query.event, category=query.category)
    logger.info("Successfully fetched %d results", len(results))
    return results
