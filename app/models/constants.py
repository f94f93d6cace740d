"""Domain constants for currency selection.

The converter offers a fixed set of currencies; each maps to a display name
and the ISO country code used to look up its flag icon.
"""

from typing import Dict, Set, TypedDict


class CurrencyInfo(TypedDict):
    name: str
    flag: str


CURRENCY_TABLE: Dict[str, CurrencyInfo] = {
    "AED": {"name": "UAE Dirham", "flag": "ae"},
    "ARS": {"name": "Argentine Peso", "flag": "ar"},
    "AUD": {"name": "Australian Dollar", "flag": "au"},
    "BDT": {"name": "Bangladeshi Taka", "flag": "bd"},
    "BRL": {"name": "Brazilian Real", "flag": "br"},
    "CAD": {"name": "Canadian Dollar", "flag": "ca"},
    "CHF": {"name": "Swiss Franc", "flag": "ch"},
    "CLP": {"name": "Chilean Peso", "flag": "cl"},
    "CNY": {"name": "Chinese Yuan", "flag": "cn"},
    "COP": {"name": "Colombian Peso", "flag": "co"},
    "CZK": {"name": "Czech Koruna", "flag": "cz"},
    "DKK": {"name": "Danish Krone", "flag": "dk"},
    "EGP": {"name": "Egyptian Pound", "flag": "eg"},
    "EUR": {"name": "Euro", "flag": "eu"},
    "GBP": {"name": "British Pound", "flag": "gb"},
    "HKD": {"name": "Hong Kong Dollar", "flag": "hk"},
    "HUF": {"name": "Hungarian Forint", "flag": "hu"},
    "IDR": {"name": "Indonesian Rupiah", "flag": "id"},
    "ILS": {"name": "Israeli New Shekel", "flag": "il"},
    "INR": {"name": "Indian Rupee", "flag": "in"},
    "JPY": {"name": "Japanese Yen", "flag": "jp"},
    "KRW": {"name": "South Korean Won", "flag": "kr"},
    "KWD": {"name": "Kuwaiti Dinar", "flag": "kw"},
    "MXN": {"name": "Mexican Peso", "flag": "mx"},
    "MYR": {"name": "Malaysian Ringgit", "flag": "my"},
    "NGN": {"name": "Nigerian Naira", "flag": "ng"},
    "NOK": {"name": "Norwegian Krone", "flag": "no"},
    "NZD": {"name": "New Zealand Dollar", "flag": "nz"},
    "PHP": {"name": "Philippine Peso", "flag": "ph"},
    "PKR": {"name": "Pakistani Rupee", "flag": "pk"},
    "PLN": {"name": "Polish Zloty", "flag": "pl"},
    "QAR": {"name": "Qatari Riyal", "flag": "qa"},
    "SAR": {"name": "Saudi Riyal", "flag": "sa"},
    "SEK": {"name": "Swedish Krona", "flag": "se"},
    "SGD": {"name": "Singapore Dollar", "flag": "sg"},
    "THB": {"name": "Thai Baht", "flag": "th"},
    "TRY": {"name": "Turkish Lira", "flag": "tr"},
    "TWD": {"name": "New Taiwan Dollar", "flag": "tw"},
    "USD": {"name": "US Dollar", "flag": "us"},
    "VND": {"name": "Vietnamese Dong", "flag": "vn"},
    "ZAR": {"name": "South African Rand", "flag": "za"},
}

CURRENCIES: Set[str] = set(CURRENCY_TABLE)
