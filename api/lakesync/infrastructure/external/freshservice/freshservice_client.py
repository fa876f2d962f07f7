"""
Cliente mínimo de FreshService REST API v2 (sin SDKs externos).

Requisitos cubiertos:
- requests, Basic auth con API key (password fija "X")
- paginación por page/per_page hasta alcanzar el total reportado
- pausa fija entre páginas para respetar el rate limit
- rate-limit/backoff (429, 5xx)
- escritura de custom fields de un requester (PUT parcial)
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

import requests
from loguru import logger

from lakesync.domain.entities.requester import CustomFieldValue, Requester
from lakesync.domain.repositories.requester_directory import IRequesterDirectory
from lakesync.shared.exceptions.domain import ConfigurationError, TargetRetrievalError


@dataclass(frozen=True)
class FreshServiceCredentials:
    base_url: str
    api_key: str


def build_update_payload(custom_fields: Mapping[str, CustomFieldValue]) -> dict[str, Any]:
    """
    Construye el body del PUT de un requester.

    Los valores None se omiten (no se envían como null): FreshService deja
    intacto cualquier campo que no venga en el payload.
    """
    return {
        "custom_fields": {
            name: value for name, value in custom_fields.items() if value is not None
        }
    }


class FreshServiceClient(IRequesterDirectory):
    """
    Cliente HTTP de FreshService para requesters.

    Importante:
    - No decide qué actualizar: eso lo hace el reconciliador.
    - fetch_all_requesters es todo-o-nada: cualquier página fallida aborta.
    - update_requester_custom_fields nunca lanza por errores HTTP/red: retorna False.
    """

    def __init__(
        self,
        credentials: FreshServiceCredentials,
        *,
        session: Optional[requests.Session] = None,
        page_size: int = 100,
        page_delay_s: float = 0.2,
        timeout_s: int = 30,
        max_retries: int = 3,
        min_backoff_s: float = 0.8,
        max_backoff_s: float = 20.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not credentials.base_url:
            raise ConfigurationError("FRESHSERVICE_BASE_URL")
        if not credentials.api_key:
            raise ConfigurationError("FRESHSERVICE_API_KEY")

        self._base_url = credentials.base_url.rstrip("/")
        self._auth = (credentials.api_key, "X")
        self._page_size = page_size
        self._page_delay_s = page_delay_s
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._min_backoff_s = min_backoff_s
        self._max_backoff_s = max_backoff_s
        self._sleep = sleep
        self._session = session or requests.Session()

    def fetch_all_requesters(self) -> list[Requester]:
        """
        Trae todos los requesters, página por página, en orden de llegada.

        Corte:
        - una página sin requesters, o
        - acumulado >= total reportado (tolera que el total "se pase").
        Si la respuesta no trae `total`, corta con la primera página incompleta.
        """
        url = f"{self._base_url}/api/v2/requesters"
        requesters: list[Requester] = []
        page = 1

        while True:
            logger.debug(f"Obteniendo requesters de FreshService, pagina {page}")
            payload = self._fetch_page(url, page)
            raw_requesters = payload.get("requesters") or []

            if not raw_requesters:
                break

            for raw in raw_requesters:
                try:
                    requesters.append(Requester.from_api(raw))
                except (TypeError, ValueError) as e:
                    raise TargetRetrievalError(
                        f"Requester invalido en pagina {page}: {e}", page=page
                    ) from e

            total = payload.get("total")
            if total is not None:
                if len(requesters) >= int(total):
                    break
            elif len(raw_requesters) < self._page_size:
                break

            page += 1
            # Pausa fija entre páginas (rate limit de FreshService)
            self._sleep(self._page_delay_s)

        logger.info(f"Obtenidos {len(requesters)} requesters de FreshService ({page} pagina(s))")
        return requesters

    def update_requester_custom_fields(
        self,
        requester_id: int,
        custom_fields: Mapping[str, CustomFieldValue],
    ) -> bool:
        url = f"{self._base_url}/api/v2/requesters/{requester_id}"
        body = build_update_payload(custom_fields)

        try:
            resp = self._request("PUT", url, json_body=body)
        except requests.RequestException as e:
            logger.error(f"Error de red actualizando requester {requester_id}: {e}")
            return False
        except Exception as e:
            logger.opt(exception=e).error(
                f"Error inesperado actualizando requester {requester_id}: {e.__class__.__name__}"
            )
            return False

        if 200 <= resp.status_code < 300:
            logger.debug(f"Requester {requester_id} actualizado")
            return True

        logger.warning(
            f"No se pudo actualizar requester {requester_id}: {resp.status_code} - {resp.text[:500]}"
        )
        return False

    def _fetch_page(self, url: str, page: int) -> dict[str, Any]:
        params = {"page": page, "per_page": self._page_size}
        try:
            resp = self._request("GET", url, params=params)
        except requests.RequestException as e:
            raise TargetRetrievalError(
                f"Error de red obteniendo requesters (pagina {page}): {e}", page=page
            ) from e

        if not 200 <= resp.status_code < 300:
            raise TargetRetrievalError(
                f"FreshService error {resp.status_code} obteniendo requesters (pagina {page}): {resp.text[:500]}",
                page=page,
                status_code_remote=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise TargetRetrievalError(
                f"Respuesta no-JSON de FreshService (pagina {page})", page=page
            ) from e

        if not isinstance(payload, dict):
            raise TargetRetrievalError(
                f"Respuesta inesperada de FreshService (pagina {page})", page=page
            )
        return payload

    def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json_body: Optional[dict[str, Any]] = None,
    ) -> requests.Response:
        """
        Request HTTP con backoff para 429/5xx.

        Estrategia:
        - 429: respeta Retry-After si existe, si no exponencial con jitter simple.
        - 5xx: exponencial con jitter.
        - Otros: se retorna la respuesta tal cual; el caller decide.
        Agotados los reintentos se retorna la última respuesta.
        """
        headers = {"Accept": "application/json"}
        attempt = 0

        while True:
            resp = self._session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                auth=self._auth,
                timeout=self._timeout_s,
            )

            retryable = resp.status_code == 429 or 500 <= resp.status_code < 600
            if not retryable or attempt >= self._max_retries:
                return resp

            sleep_s = self._retry_delay(resp, attempt)
            logger.warning(
                f"FreshService {resp.status_code} en {method} {url}; "
                f"reintento {attempt + 1}/{self._max_retries} en {sleep_s:.2f}s"
            )
            self._sleep(sleep_s)
            attempt += 1

    def _retry_delay(self, resp: requests.Response, attempt: int) -> float:
        retry_after = resp.headers.get("Retry-After")
        if retry_after:
            try:
                return min(self._max_backoff_s, float(retry_after))
            except ValueError:
                return self._min_backoff_s
        # Exponencial simple + jitter proporcional
        base = min(self._max_backoff_s, self._min_backoff_s * (2**attempt))
        return base + (0.15 * base)
