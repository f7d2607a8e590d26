# app/models/__init__.py

from .faq.faq import FAQ
from .voucher.voucher import Voucher
from .payment.payment_method import PaymentMethod
