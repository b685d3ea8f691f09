from dataclasses import dataclass


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    name: str


CURRENCIES: tuple[Currency, ...] = (
    Currency("INR", "₹", "Indian Rupee"),
    Currency("USD", "$", "US Dollar"),
    Currency("EUR", "€", "Euro"),
    Currency("GBP", "£", "British Pound"),
    Currency("JPY", "¥", "Japanese Yen"),
    Currency("AUD", "A$", "Australian Dollar"),
    Currency("CAD", "C$", "Canadian Dollar"),
    Currency("CHF", "Fr", "Swiss Franc"),
    Currency("CNY", "¥", "Chinese Yuan"),
    Currency("SGD", "S$", "Singapore Dollar"),
    Currency("HKD", "HK$", "Hong Kong Dollar"),
    Currency("NZD", "NZ$", "New Zealand Dollar"),
    Currency("SEK", "kr", "Swedish Krona"),
    Currency("KRW", "₩", "South Korean Won"),
    Currency("BRL", "R$", "Brazilian Real"),
    Currency("MXN", "$", "Mexican Peso"),
    Currency("ZAR", "R", "South African Rand"),
    Currency("RUB", "₽", "Russian Ruble"),
    Currency("TRY", "₺", "Turkish Lira"),
    Currency("AED", "dh", "UAE Dirham"),
)

_BY_CODE = {currency.code: currency for currency in CURRENCIES}


def is_known_currency(code: str) -> bool:
    return code in _BY_CODE


def currency_symbol(code: str) -> str:
    currency = _BY_CODE.get(code)
    return currency.symbol if currency else code
