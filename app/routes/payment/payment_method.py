import logging
from typing import List
from fastapi import APIRouter, Depends, status

from app.auth.auth import get_current_user
from app.core.exceptions.app_exception import AppHttpException
from app.core.middlewares.users import is_admin
from app.database.connection import get_session
from app.database.supabase import RecordStoreError, SupabaseClient
from app.helpers.ordering import save_reorder, sort_by_order
from app.models.payment.payment_method import PAYMENT_METHOD_TABLE, PaymentMethod
from app.schemas.auth.auth import CurrentUser
from app.schemas.payment.payment_method import PaymentMethodCreate, PaymentMethodUpdate
from app.schemas.reorder import ReorderRequest

db_session = get_session

class PaymentMethodRouter(APIRouter):
    """
    Formas de pagamento exibidas no checkout (conta, titular e QR code).
    """
    def __init__(self, *args, **kwargs):
        super().__init__(tags=["PaymentMethod"], *args, **kwargs)

        self.add_api_route("/payment-methods", self.get_active_payment_methods, methods=["GET"],
                           response_model=List[PaymentMethod])

        self.add_api_route("/admin/payment-methods", self.get_all_payment_methods, methods=["GET"],
                           response_model=List[PaymentMethod])
        self.add_api_route("/admin/payment-methods", self.create_payment_method, methods=["POST"],
                           response_model=PaymentMethod, status_code=status.HTTP_201_CREATED)
        self.add_api_route("/admin/payment-methods/reorder", self.reorder_payment_methods, methods=["POST"],
                           response_model=List[PaymentMethod])
        self.add_api_route("/admin/payment-methods/{method_id}", self.update_payment_method, methods=["PUT"],
                           response_model=PaymentMethod)
        self.add_api_route("/admin/payment-methods/{method_id}", self.delete_payment_method, methods=["DELETE"],
                           response_model=dict)

    async def get_active_payment_methods(self, session: SupabaseClient = Depends(db_session)):
        try:
            return await session.select(PAYMENT_METHOD_TABLE, {"active": True}, order="sort_order")
        except RecordStoreError as e:
            logging.error(f"PAGAMENTO >>> Erro ao buscar formas de pagamento: {e}")
            raise AppHttpException.from_store_error(e, "Failed to fetch payment methods")

    async def get_all_payment_methods(
        self,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        try:
            return await session.select(PAYMENT_METHOD_TABLE, order="sort_order")
        except RecordStoreError as e:
            logging.error(f"PAGAMENTO >>> Erro ao buscar todas as formas de pagamento: {e}")
            raise AppHttpException.from_store_error(e, "Failed to fetch payment methods")

    async def create_payment_method(
        self,
        method: PaymentMethodCreate,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        payload = method.to_insert_payload()
        logging.info(f"PAGAMENTO >>> Adicionando forma de pagamento {payload['id']} (qr_code_url={payload['qr_code_url']!r})")

        try:
            created = await session.insert(PAYMENT_METHOD_TABLE, payload)
        except RecordStoreError as e:
            logging.error(f"PAGAMENTO >>> Erro ao adicionar forma de pagamento {payload['id']}: {e}")
            raise AppHttpException.from_store_error(e, "Failed to add payment method")

        return created

    async def update_payment_method(
        self,
        method_id: str,
        method: PaymentMethodUpdate,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        payload = method.to_update_payload()
        if not payload:
            raise AppHttpException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

        logging.info(f"PAGAMENTO >>> Atualizando {method_id}: {sorted(payload)}")
        try:
            updated = await session.update(PAYMENT_METHOD_TABLE, method_id, payload)
        except RecordStoreError as e:
            logging.error(f"PAGAMENTO >>> Erro ao atualizar forma de pagamento {method_id}: {e}")
            raise AppHttpException.from_store_error(
                e, "Failed to update payment method", not_found="Payment method not found"
            )

        sent_qr = payload.get("qr_code_url")
        if sent_qr and updated.get("qr_code_url") != sent_qr:
            logging.warning(
                f"PAGAMENTO >>> qr_code_url divergente em {method_id}: "
                f"enviado={sent_qr!r} recebido={updated.get('qr_code_url')!r}"
            )
        return updated

    async def delete_payment_method(
        self,
        method_id: str,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        try:
            await session.delete(PAYMENT_METHOD_TABLE, method_id)
        except RecordStoreError as e:
            logging.error(f"PAGAMENTO >>> Erro ao deletar forma de pagamento {method_id}: {e}")
            raise AppHttpException.from_store_error(
                e, "Failed to delete payment method", not_found="Payment method not found"
            )

        logging.info(f"PAGAMENTO >>> Forma de pagamento {method_id} removida")
        return {"detail": "Payment method deleted"}

    async def reorder_payment_methods(
        self,
        request: ReorderRequest,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        try:
            saved = await save_reorder(session, PAYMENT_METHOD_TABLE, request.ordered_ids)
        except ValueError as e:
            raise AppHttpException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        except RecordStoreError as e:
            logging.error(f"PAGAMENTO >>> Erro ao reordenar formas de pagamento: {e}")
            raise AppHttpException.from_store_error(e, "Failed to reorder payment methods")

        return sort_by_order(saved)
