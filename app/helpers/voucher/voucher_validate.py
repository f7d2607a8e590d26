# app/helpers/voucher/voucher_validate.py
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from pydantic import ValidationError

from app.database.supabase import RecordStoreError
from app.enums.discount_type import DiscountType
from app.enums.voucher_rejection import VoucherRejection
from app.helpers.formatters import format_currency
from app.models.voucher.voucher import Voucher
from app.schemas.voucher.voucher import VoucherValidationResult, normalize_code

VoucherLookup = Callable[[str], Awaitable[Optional[Dict[str, Any]]]]

INVALID_CODE_MESSAGE = "Invalid voucher code."
INACTIVE_MESSAGE = "This voucher is no longer active."
EXPIRED_MESSAGE = "This voucher has expired."
USAGE_LIMIT_MESSAGE = "This voucher has reached its usage limit."
LOOKUP_FAILED_MESSAGE = "Failed to validate voucher."

def minimum_purchase_message(amount: float) -> str:
    return f"Minimum purchase of {format_currency(amount)} required."

def reject(reason: VoucherRejection, message: str) -> VoucherValidationResult:
    return VoucherValidationResult(valid=False, discount=0, reason=reason, message=message)

def compute_discount(voucher: Voucher, cart_total: float) -> float:
    """
    Calcula o desconto de um voucher já aprovado.

    Percentual: aplica o teto ``max_discount`` (se houver) e só depois limita
    ao total do carrinho. Fixo: o valor do voucher, limitado ao total.
    """
    if voucher.discount_type == DiscountType.PERCENTAGE:
        discount = cart_total * voucher.discount_value / 100
        if voucher.max_discount is not None and discount > voucher.max_discount:
            discount = voucher.max_discount
    else:
        discount = voucher.discount_value

    if discount > cart_total:
        discount = cart_total
    return discount

def check_voucher(voucher: Voucher, cart_total: float, now: Optional[datetime] = None) -> VoucherValidationResult:
    """Aplica as regras na ordem fixa; a primeira que falhar encerra a validação."""
    now = now or datetime.now(timezone.utc)

    if not voucher.active:
        return reject(VoucherRejection.INACTIVE, INACTIVE_MESSAGE)

    expires_at = voucher.expires_at_utc
    if expires_at is not None and expires_at < now:
        return reject(VoucherRejection.EXPIRED, EXPIRED_MESSAGE)

    if voucher.has_usage_limit and voucher.times_used >= voucher.max_uses:
        return reject(VoucherRejection.USAGE_LIMIT_REACHED, USAGE_LIMIT_MESSAGE)

    if cart_total < voucher.min_purchase_amount:
        return reject(
            VoucherRejection.BELOW_MINIMUM_PURCHASE,
            minimum_purchase_message(voucher.min_purchase_amount),
        )

    return VoucherValidationResult(
        valid=True,
        discount=compute_discount(voucher, cart_total),
        voucher=voucher,
    )

async def validate_voucher(
    code: str,
    cart_total: float,
    lookup: VoucherLookup,
    now: Optional[datetime] = None,
) -> VoucherValidationResult:
    """
    Valida um código de voucher contra o total do carrinho.

    Nunca levanta exceção: toda falha, inclusive erro de rede ao buscar o
    voucher, volta como resultado inválido. Não incrementa ``times_used``.
    """
    normalized = normalize_code(code)
    try:
        record = await lookup(normalized)
        voucher = Voucher.model_validate(record) if record else None
    except (RecordStoreError, ValidationError) as e:
        logging.error(f"VOUCHER >>> Erro ao validar voucher {normalized}: {e}", exc_info=True)
        return reject(VoucherRejection.LOOKUP_FAILED, LOOKUP_FAILED_MESSAGE)

    if voucher is None:
        logging.info(f"VOUCHER >>> Código {normalized!r} não encontrado")
        return reject(VoucherRejection.NOT_FOUND, INVALID_CODE_MESSAGE)

    result = check_voucher(voucher, cart_total, now)
    if result.valid:
        logging.info(f"VOUCHER >>> {voucher.code} aprovado, desconto {result.discount}")
    else:
        logging.info(f"VOUCHER >>> {voucher.code} recusado: {result.reason.value}")
    return result
