"""
assistant.tools.exchange

Currency conversion rates from exchangerate-api.com.
The public v4 endpoint needs no key; when EXCHANGE_API_KEY is set the keyed v6 endpoint is used.
"""

from dataclasses import dataclass

from assistant.errors import ProviderLookupFailure
from util.http import get_json


PROVIDER = "exchangerate"


@dataclass
class ExchangeRate:
    rate: float
    from_currency: str
    to_currency: str


def fetch_exchange_rate(base, target, api_key="") -> ExchangeRate:
    base, target = base.upper(), target.upper()
    if api_key:
        data = get_json(f"https://v6.exchangerate-api.com/v6/{api_key}/latest/{base}", PROVIDER)
        rates = data.get("conversion_rates") or {}
    else:
        data = get_json(f"https://api.exchangerate-api.com/v4/latest/{base}", PROVIDER)
        rates = data.get("rates") or {}
    if target not in rates:
        raise ProviderLookupFailure(PROVIDER, f"no rate for {base} -> {target}")
    return ExchangeRate(rate=float(rates[target]), from_currency=base, to_currency=target)
