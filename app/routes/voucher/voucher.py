import logging
from typing import List
from fastapi import APIRouter, Depends, status

from app.auth.auth import get_current_user
from app.core.exceptions.app_exception import AppHttpException
from app.core.middlewares.users import is_admin
from app.database.connection import get_session
from app.database.supabase import RecordStoreError, SupabaseClient
from app.helpers.voucher.voucher_validate import VoucherLookup, validate_voucher
from app.models.voucher.voucher import VOUCHER_TABLE, Voucher
from app.schemas.auth.auth import CurrentUser
from app.schemas.voucher.voucher import (
    VoucherCreate,
    VoucherUpdate,
    VoucherValidateRequest,
    VoucherValidationResult,
)

db_session = get_session

def voucher_lookup(session: SupabaseClient) -> VoucherLookup:
    async def lookup(code: str):
        return await session.select_one(VOUCHER_TABLE, {"code": code})
    return lookup

class VoucherRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(tags=["Voucher"], *args, **kwargs)
        self.add_api_route("/vouchers/validate", self.validate_voucher_code, methods=["POST"], response_model=VoucherValidationResult)

        self.add_api_route("/admin/vouchers", self.get_all_vouchers, methods=["GET"], response_model=List[Voucher])
        self.add_api_route("/admin/vouchers", self.create_voucher, methods=["POST"], response_model=Voucher,
                           status_code=status.HTTP_201_CREATED)
        self.add_api_route("/admin/vouchers/{voucher_id}", self.update_voucher, methods=["PUT"], response_model=Voucher)
        self.add_api_route("/admin/vouchers/{voucher_id}/toggle", self.toggle_voucher, methods=["PATCH"], response_model=Voucher)
        self.add_api_route("/admin/vouchers/{voucher_id}", self.delete_voucher, methods=["DELETE"], response_model=dict)

    async def validate_voucher_code(self, request: VoucherValidateRequest, session: SupabaseClient = Depends(db_session)):
        """Checkout: responde se o voucher pode ser usado agora e quanto desconta."""
        return await validate_voucher(request.code, request.cart_total, voucher_lookup(session))

    async def get_all_vouchers(
        self,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        try:
            return await session.select(VOUCHER_TABLE, order="created_at", ascending=False)
        except RecordStoreError as e:
            logging.error(f"VOUCHER >>> Erro ao buscar vouchers: {e}")
            raise AppHttpException.from_store_error(e, "Failed to fetch vouchers")

    async def create_voucher(
        self,
        voucher: VoucherCreate,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        logging.info(f"VOUCHER >>> Criando voucher {voucher.code}")

        voucher_data = voucher.model_dump(mode="json")
        voucher_data["times_used"] = 0

        try:
            return await session.insert(VOUCHER_TABLE, voucher_data)
        except RecordStoreError as e:
            logging.error(f"VOUCHER >>> Erro ao adicionar voucher {voucher.code}: {e}")
            if e.is_unique_violation:
                raise AppHttpException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="Voucher code already exists",
                    solution="Choose a different code.",
                )
            raise AppHttpException.from_store_error(e, "Failed to add voucher")

    async def update_voucher(
        self,
        voucher_id: str,
        voucher: VoucherUpdate,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        update_data = voucher.to_update_payload()
        if not update_data:
            raise AppHttpException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

        try:
            updated = await session.update(VOUCHER_TABLE, voucher_id, update_data)
        except RecordStoreError as e:
            logging.error(f"VOUCHER >>> Erro ao atualizar voucher {voucher_id}: {e}")
            if e.is_unique_violation:
                raise AppHttpException(status_code=status.HTTP_409_CONFLICT, detail="Voucher code already exists")
            raise AppHttpException.from_store_error(e, "Failed to update voucher", not_found="Voucher not found")

        logging.info(f"VOUCHER >>> Voucher {voucher_id} atualizado: {sorted(update_data)}")
        return updated

    async def toggle_voucher(
        self,
        voucher_id: str,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        try:
            current = await session.select_one(VOUCHER_TABLE, {"id": voucher_id}, columns="id,active")
            if not current:
                raise AppHttpException(status_code=status.HTTP_404_NOT_FOUND, detail="Voucher not found")
            updated = await session.update(VOUCHER_TABLE, voucher_id, {"active": not current["active"]})
        except RecordStoreError as e:
            logging.error(f"VOUCHER >>> Erro ao alternar voucher {voucher_id}: {e}")
            raise AppHttpException.from_store_error(e, "Failed to update voucher", not_found="Voucher not found")

        logging.info(f"VOUCHER >>> Voucher {voucher_id} agora {'ativo' if updated['active'] else 'inativo'}")
        return updated

    async def delete_voucher(
        self,
        voucher_id: str,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        try:
            await session.delete(VOUCHER_TABLE, voucher_id)
        except RecordStoreError as e:
            logging.error(f"VOUCHER >>> Erro ao deletar voucher {voucher_id}: {e}")
            raise AppHttpException.from_store_error(e, "Failed to delete voucher", not_found="Voucher not found")

        logging.info(f"VOUCHER >>> Voucher {voucher_id} removido")
        return {"detail": "Voucher deleted"}
