from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Optional, Any

from app.database.supabase import RecordNotFoundError, RecordStoreError


class AppHttpException(HTTPException):
    def __init__(
        self,
        status_code: int,
        detail: str,
        solution: Optional[str] = None,
        errors: Optional[Any] = None,
    ):
        content = {
            "detail": detail,
        }
        if solution:
            content["solution"] = solution
        if errors:
            content["errors"] = errors

        super().__init__(status_code=status_code, detail=detail)
        self.status_code = status_code
        self.detail = detail
        self.solution = solution
        self.errors = errors
        self.content = content

    @classmethod
    def from_store_error(cls, error: RecordStoreError, detail: str, not_found: str = "Record not found") -> "AppHttpException":
        """Traduz uma falha do Supabase para a resposta HTTP do painel."""
        if isinstance(error, RecordNotFoundError) or error.status_code == status.HTTP_404_NOT_FOUND:
            return cls(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)
        if error.is_unique_violation:
            return cls(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"{detail}: record already exists",
                errors=error.message,
            )
        return cls(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            solution="Try again later or check the Supabase project status.",
            errors=error.message,
        )


async def app_exception_handler(request: Request, exc: AppHttpException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.content, headers=exc.headers)
