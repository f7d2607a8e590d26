import logging
from typing import List
from fastapi import APIRouter, Depends, status

from app.auth.auth import get_current_user
from app.core.exceptions.app_exception import AppHttpException
from app.core.middlewares.users import is_admin
from app.database.connection import get_session
from app.database.supabase import RecordStoreError, SupabaseClient
from app.helpers.ordering import next_sort_order, save_reorder, sort_by_order
from app.models.faq.faq import FAQ, FAQ_TABLE
from app.schemas.auth.auth import CurrentUser
from app.schemas.faq.faq import FAQCreate, FAQUpdate
from app.schemas.reorder import ReorderRequest

db_session = get_session

class FAQRouter(APIRouter):
    """
    Perguntas frequentes: listagem pública e CRUD do painel administrativo.
    """
    def __init__(self, *args, **kwargs):
        super().__init__(tags=["FAQ"], *args, **kwargs)

        self.add_api_route("/faqs", self.get_active_faqs, methods=["GET"], response_model=List[FAQ])

        self.add_api_route("/admin/faqs", self.get_all_faqs, methods=["GET"], response_model=List[FAQ])
        self.add_api_route("/admin/faqs", self.create_faq, methods=["POST"], response_model=FAQ,
                           status_code=status.HTTP_201_CREATED)
        self.add_api_route("/admin/faqs/reorder", self.reorder_faqs, methods=["POST"], response_model=List[FAQ])
        self.add_api_route("/admin/faqs/{faq_id}", self.update_faq, methods=["PUT"], response_model=FAQ)
        self.add_api_route("/admin/faqs/{faq_id}", self.delete_faq, methods=["DELETE"], response_model=dict)

    async def get_active_faqs(self, session: SupabaseClient = Depends(db_session)):
        try:
            return await session.select(FAQ_TABLE, {"active": True}, order="sort_order")
        except RecordStoreError as e:
            logging.error(f"FAQ >>> Erro ao buscar FAQs: {e}")
            raise AppHttpException.from_store_error(e, "Failed to fetch FAQs")

    async def get_all_faqs(
        self,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        try:
            return await session.select(FAQ_TABLE, order="sort_order")
        except RecordStoreError as e:
            logging.error(f"FAQ >>> Erro ao buscar FAQs: {e}")
            raise AppHttpException.from_store_error(e, "Failed to fetch FAQs")

    async def create_faq(
        self,
        faq: FAQCreate,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        try:
            sort_order = faq.sort_order
            # 0 ou ausente: entra no fim da lista
            if not sort_order:
                last = await session.select_one(FAQ_TABLE, order="sort_order", ascending=False, columns="sort_order")
                sort_order = next_sort_order(last)

            created = await session.insert(FAQ_TABLE, {**faq.model_dump(), "sort_order": sort_order})
        except RecordStoreError as e:
            logging.error(f"FAQ >>> Erro ao adicionar FAQ: {e}")
            raise AppHttpException.from_store_error(e, "Failed to add FAQ")

        logging.info(f"FAQ >>> FAQ {created.get('id')} criada na posição {sort_order}")
        return created

    async def update_faq(
        self,
        faq_id: str,
        faq: FAQUpdate,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        update_data = faq.to_update_payload()
        if not update_data:
            raise AppHttpException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

        try:
            updated = await session.update(FAQ_TABLE, faq_id, update_data)
        except RecordStoreError as e:
            logging.error(f"FAQ >>> Erro ao atualizar FAQ {faq_id}: {e}")
            raise AppHttpException.from_store_error(e, "Failed to update FAQ", not_found="FAQ not found")

        logging.info(f"FAQ >>> FAQ {faq_id} atualizada: {sorted(update_data)}")
        return updated

    async def delete_faq(
        self,
        faq_id: str,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        try:
            await session.delete(FAQ_TABLE, faq_id)
        except RecordStoreError as e:
            logging.error(f"FAQ >>> Erro ao deletar FAQ {faq_id}: {e}")
            raise AppHttpException.from_store_error(e, "Failed to delete FAQ", not_found="FAQ not found")

        logging.info(f"FAQ >>> FAQ {faq_id} removida")
        return {"detail": "FAQ deleted"}

    async def reorder_faqs(
        self,
        request: ReorderRequest,
        current_user: CurrentUser = Depends(get_current_user),
        session: SupabaseClient = Depends(db_session),
    ):
        is_admin(current_user)
        try:
            saved = await save_reorder(session, FAQ_TABLE, request.ordered_ids)
        except ValueError as e:
            raise AppHttpException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        except RecordStoreError as e:
            logging.error(f"FAQ >>> Erro ao reordenar FAQs: {e}")
            raise AppHttpException.from_store_error(e, "Failed to reorder FAQs")

        logging.info(f"FAQ >>> {len(saved)} FAQs reordenadas")
        return sort_by_order(saved)
