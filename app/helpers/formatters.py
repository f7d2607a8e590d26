from babel.numbers import format_currency as babel_format_currency

from app.configuration.settings import Configuration

configuration = Configuration()

# Centavos só aparecem quando existem: 1000 -> ₱1,000, 1500.5 -> ₱1,500.5
CURRENCY_PATTERN = "¤#,##0.###"

def format_currency(value: float, currency: str = None, locale_str: str = None) -> str:
    return babel_format_currency(
        value,
        currency or configuration.currency,
        format=CURRENCY_PATTERN,
        locale=locale_str or configuration.currency_locale,
        currency_digits=False,
    )
