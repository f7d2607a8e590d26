import asyncio
import logging
from typing import Any, Dict, List

from app.database.connection import create_client
from app.database.supabase import SupabaseClient
from app.models.faq.faq import FAQ_TABLE
from app.models.payment.payment_method import PAYMENT_METHOD_TABLE

DEFAULT_FAQS: List[Dict[str, Any]] = [
    {
        "question": "How long does shipping take?",
        "answer": "Orders within Metro Manila arrive in 1-3 business days; provincial orders in 3-7 business days.",
        "active": True,
        "sort_order": 1,
    },
    {
        "question": "How do I pay for my order?",
        "answer": "Choose one of the payment methods at checkout, send the exact amount and upload your proof of payment.",
        "active": True,
        "sort_order": 2,
    },
    {
        "question": "Can I use more than one voucher?",
        "answer": "Only one voucher can be applied per order.",
        "active": True,
        "sort_order": 3,
    },
]

DEFAULT_PAYMENT_METHODS: List[Dict[str, Any]] = [
    {
        "id": "gcash",
        "name": "GCash",
        "account_number": "",
        "account_name": "",
        "qr_code_url": "",
        "active": True,
        "sort_order": 1,
    },
    {
        "id": "bank-transfer",
        "name": "Bank Transfer",
        "account_number": "",
        "account_name": "",
        "qr_code_url": "",
        "active": False,
        "sort_order": 2,
    },
]

async def populate_database(session: SupabaseClient) -> Dict[str, int]:
    """Popula FAQs e formas de pagamento padrão quando as tabelas estão vazias."""
    return {
        FAQ_TABLE: await populate_table(session, FAQ_TABLE, DEFAULT_FAQS),
        PAYMENT_METHOD_TABLE: await populate_table(session, PAYMENT_METHOD_TABLE, DEFAULT_PAYMENT_METHODS),
    }

async def populate_table(session: SupabaseClient, table: str, rows: List[Dict[str, Any]]) -> int:
    existing = await session.select_one(table, columns="id")
    if existing:
        logging.info(f"SISTEMA >>> Tabela {table} já possui dados, nada a fazer")
        return 0

    for row in rows:
        await session.insert(table, row)
    logging.info(f"SISTEMA >>> {len(rows)} registros inseridos em {table}")
    return len(rows)

async def main():
    async with create_client() as session:
        await populate_database(session)

if __name__ == "__main__":
    asyncio.run(main())
