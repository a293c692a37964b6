# kaloltsavam/apps/results/api.py
"""
Endpoint JSON de lectura anónima:
  GET /api/results/?search=&event=&category=[&seq=]
    200 {"results": [...]}        (+ "seq" si vino en la request)
    400 {"error": "..."}          fallo de consulta
    401 {"error": "..."}          RESULTS_API_KEY configurada y no enviada / incorrecta
    500 {"error": "..."}          fallo inesperado
  OPTIONS → preflight con CORS permisivo
"""
from __future__ import annotations

import hmac
import logging
from typing import Any, Dict, Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from .exceptions import StoreReadError
from .query import ResultQuery, search_results

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
}


def _with_cors(response: HttpResponse) -> HttpResponse:
    for k, v in CORS_HEADERS.items():
        response[k] = v
    return response


def _json(payload: Dict[str, Any], status: int = 200) -> HttpResponse:
    return _with_cors(JsonResponse(payload, status=status))


def _request_api_key(request: HttpRequest) -> Optional[str]:
    key = request.headers.get("apikey")
    if key:
        return key.strip()
    auth = request.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        return auth[len("Bearer "):].strip()
    return None


def _api_key_ok(request: HttpRequest) -> bool:
    expected = getattr(settings, "RESULTS_API_KEY", "")
    if not expected:
        return True
    given = _request_api_key(request) or ""
    return hmac.compare_digest(given.encode(), expected.encode())


@csrf_exempt
@require_http_methods(["GET", "OPTIONS"])
def results_endpoint(request: HttpRequest) -> HttpResponse:
    if request.method == "OPTIONS":
        return _with_cors(HttpResponse(status=200))

    if not _api_key_ok(request):
        return _json({"error": "Missing or invalid API key."}, status=401)

    query = ResultQuery.from_params(request.GET)
    try:
        results = search_results(query)
    except StoreReadError as exc:
        return _json({"error": str(exc)}, status=400)
    except Exception:
        logger.exception("Unexpected error fetching results")
        return _json({"error": "An unexpected error occurred."}, status=500)

    payload: Dict[str, Any] = {"results": [r.as_dict() for r in results]}
    # Token de generación: el cliente descarta respuestas con seq viejo
    seq = request.GET.get("seq")
    if seq:
        payload["seq"] = seq
    return _json(payload)


def health(request: HttpRequest) -> JsonResponse:
    return JsonResponse({"ok": True})
