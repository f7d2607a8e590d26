# app/helpers/ordering.py
from typing import Any, Dict, List, Optional, Sequence

Row = Dict[str, Any]

def sort_by_order(rows: Sequence[Row]) -> List[Row]:
    """Nova lista ordenada por ``sort_order`` (estável para empates)."""
    return sorted(rows, key=lambda row: row.get("sort_order") or 0)

def next_sort_order(last_row: Optional[Row]) -> int:
    return ((last_row or {}).get("sort_order") or 0) + 1

def apply_reorder(rows: Sequence[Row], ordered_ids: Sequence[str]) -> List[Row]:
    """
    Devolve as linhas com ``sort_order`` renumerado a partir de 1.

    As linhas listadas em ``ordered_ids`` vêm primeiro, na ordem pedida; as
    demais seguem na ordem em que já estavam. Ids desconhecidos geram
    ``ValueError`` e nenhuma linha é alterada.
    """
    by_id = {str(row["id"]): row for row in rows}
    unknown = [record_id for record_id in ordered_ids if record_id not in by_id]
    if unknown:
        raise ValueError(f"Unknown ids: {', '.join(unknown)}")

    listed = set(ordered_ids)
    remaining = [row for row in sort_by_order(rows) if str(row["id"]) not in listed]
    ordered = [by_id[record_id] for record_id in ordered_ids] + remaining

    return [{**row, "sort_order": position} for position, row in enumerate(ordered, start=1)]

async def save_reorder(session, table: str, ordered_ids: Sequence[str]) -> List[Row]:
    """
    Lê a tabela, renumera com ``apply_reorder`` e grava tudo num único upsert.

    O upsert (``merge-duplicates``) insere qualquer linha que não exista mais,
    então os ids são relidos logo antes da escrita e linhas apagadas nesse meio
    tempo ficam de fora. Ainda sobra uma janela entre essa releitura e o
    upsert; fechá-la de vez exige uma função no banco (RPC) que só atualize.
    """
    rows = await session.select(table, order="sort_order")
    reordered = apply_reorder(rows, ordered_ids)

    current_ids = {str(row["id"]) for row in await session.select(table, columns="id")}
    reordered = [row for row in reordered if str(row["id"]) in current_ids]
    if not reordered:
        return []
    return await session.upsert(table, reordered)
