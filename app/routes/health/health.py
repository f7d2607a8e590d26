from datetime import datetime, timezone
import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.configuration.settings import Configuration
from app.database.connection import get_session
from app.database.supabase import RecordStoreError, SupabaseClient

configuration = Configuration()
db_session = get_session

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()

class HealthRouter(APIRouter):
    """
    Verifica se o banco do Supabase está de pé (também usado pelo keep-alive).
    """
    def __init__(self, *args, **kwargs):
        super().__init__(prefix="/api", tags=["Health"], *args, **kwargs)
        self.add_api_route("/health", self.check_health, methods=["GET"],
                           responses={
                               500: {"description": "Supabase não configurado"},
                               503: {"description": "Banco não respondeu"},
                           })
        self.add_api_route("/health", self.method_not_allowed, methods=["POST", "PUT", "PATCH", "DELETE"],
                           include_in_schema=False)

    async def check_health(self, session: SupabaseClient = Depends(db_session)) -> JSONResponse:
        if not configuration.has_supabase():
            logging.error("HEALTH >>> Supabase sem URL ou chave configurada")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"status": "error", "message": "Missing Supabase configuration"},
            )

        try:
            await session.ping()
        except RecordStoreError as e:
            logging.error(f"HEALTH >>> Health check falhou: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "unhealthy",
                    "message": "Database health check failed",
                    "error": e.message,
                    "timestamp": _now(),
                },
            )

        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={
                "status": "healthy",
                "message": "Database is active and responding",
                "timestamp": _now(),
                "supabase_project": configuration.supabase_project(),
            },
        )

    async def method_not_allowed(self) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, content={"error": "Method not allowed"})
