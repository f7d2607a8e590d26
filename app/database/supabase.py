import logging
from typing import Any, Dict, List, Optional

import httpx


class RecordStoreError(Exception):
    """Falha ao conversar com o PostgREST do Supabase."""

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    @property
    def is_unique_violation(self) -> bool:
        return self.code == "23505"


class RecordNotFoundError(RecordStoreError):
    def __init__(self, table: str, record_id: Any):
        super().__init__(f"{table} {record_id} not found", status_code=404, code="PGRST116")
        self.table = table
        self.record_id = record_id


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class SupabaseClient:
    """
    Cliente assíncrono mínimo para a API REST (PostgREST) do Supabase.

    Os filtros são sempre de igualdade: ``{"active": True}`` vira
    ``?active=eq.true``.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url.rstrip("/")
        self.rest_url = f"{self.url}/rest/v1"
        self.client = httpx.AsyncClient(
            base_url=self.rest_url,
            headers={
                "apikey": api_key or "",
                "Authorization": f"Bearer {api_key or ''}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "SupabaseClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def _build_params(
        self,
        filters: Optional[Dict[str, Any]] = None,
        columns: Optional[str] = None,
        order: Optional[str] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
    ) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if columns:
            params["select"] = columns
        for column, value in (filters or {}).items():
            operator = "is" if value is None else "eq"
            params[column] = f"{operator}.{_format_value(value)}"
        if order:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"
        if limit is not None:
            params["limit"] = str(limit)
        return params

    async def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> Any:
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = await self.client.request(method, f"/{table}", params=params, json=json, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            body = self._error_body(e.response)
            logging.error(f"SUPABASE >>> {method} {table} respondeu {e.response.status_code}: {body}")
            raise RecordStoreError(
                body.get("message") or f"Database responded with status: {e.response.status_code}",
                status_code=e.response.status_code,
                code=body.get("code"),
            ) from e
        except httpx.RequestError as e:
            logging.error(f"SUPABASE >>> Erro de conexão em {method} {table}: {e}")
            raise RecordStoreError(str(e) or e.__class__.__name__) from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logging.error(f"SUPABASE >>> {method} {table} devolveu corpo que não é JSON ({response.status_code})")
            raise RecordStoreError("Invalid JSON from database", status_code=response.status_code) from e

    @staticmethod
    def _error_body(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {"message": response.text}
        return body if isinstance(body, dict) else {"message": str(body)}

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
        columns: str = "*",
    ) -> List[Dict[str, Any]]:
        params = self._build_params(filters, columns, order, ascending, limit)
        return await self._request("GET", table, params=params) or []

    async def select_one(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        ascending: bool = True,
        columns: str = "*",
    ) -> Optional[Dict[str, Any]]:
        rows = await self.select(table, filters, order=order, ascending=ascending, limit=1, columns=columns)
        return rows[0] if rows else None

    async def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        rows = await self._request(
            "POST", table, params={"select": "*"}, json=[record], prefer="return=representation"
        )
        return rows[0]

    async def update(self, table: str, record_id: Any, values: Dict[str, Any]) -> Dict[str, Any]:
        params = self._build_params({"id": record_id}, columns="*")
        rows = await self._request("PATCH", table, params=params, json=values, prefer="return=representation")
        if not rows:
            raise RecordNotFoundError(table, record_id)
        return rows[0]

    async def delete(self, table: str, record_id: Any) -> None:
        params = self._build_params({"id": record_id}, columns="id")
        rows = await self._request("DELETE", table, params=params, prefer="return=representation")
        if not rows:
            raise RecordNotFoundError(table, record_id)

    async def upsert(self, table: str, records: List[Dict[str, Any]], on_conflict: str = "id") -> List[Dict[str, Any]]:
        """Grava todas as linhas numa única instrução (tudo ou nada)."""
        return await self._request(
            "POST",
            table,
            params={"on_conflict": on_conflict, "select": "*"},
            json=records,
            prefer="resolution=merge-duplicates,return=representation",
        ) or []

    async def ping(self, table: str = "products") -> None:
        await self._request("GET", table, params={"select": "count"}, prefer="count=exact")
