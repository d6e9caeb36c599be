"""
Module for formatting currency, date and month values using Babel.

"""
import datetime
import logging
from decimal import Decimal, localcontext
from typing import List, Union

from babel import Locale, numbers, dates, UnknownLocaleError

DEFAULT_LOCALE = 'en_US'

CURRENCY_MAP: dict[str, str] = {
    'US': 'USD',
    'GB': 'GBP',
    'DE': 'EUR',
    'FR': 'EUR',
    'BE': 'EUR',
    'IT': 'EUR',
    'ES': 'EUR',
    'JP': 'JPY',
    'CA': 'CAD',
    'AU': 'AUD',
    'IN': 'INR',
    'BR': 'BRL',
    'CN': 'CNY',
    'KR': 'KRW',
    'DK': 'DKK',
    'SE': 'SEK',
    'NO': 'NOK',
    'FI': 'EUR',
    'HU': 'HUF',
    'MX': 'MXN',
    'ZA': 'ZAR',
    'NL': 'EUR',
}

LOCALE_MAP: List[str] = [
    'en_US',
    'en_GB',
    'en_AU',
    'en_CA',
    'en_IN',
    'en_ZA',
    'de_DE',
    'es_ES',
    'es_MX',
    'fi_FI',
    'fr_BE',
    'fr_FR',
    'hu_HU',
    'it_IT',
    'ja_JP',
    'ko_KR',
    'nb_NO',
    'nl_NL',
    'pt_BR',
    'sv_SE',
    'da_DK',
    'zh_CN',
]

Number = Union[Decimal, float, int]


def get_currency_from_locale(locale: str) -> str:
    """
    Retrieve the default currency code based on the locale's territory.

    Args:
        locale (str): Locale string, e.g. 'fr_FR'.

    Returns:
        str: Currency code such as 'EUR'. Defaults to 'USD' if the territory is unknown.
    """
    parts = locale.split('_')
    if len(parts) < 2:
        return 'USD'
    return CURRENCY_MAP.get(parts[1], 'USD')


def _parse_locale(locale: str) -> Locale:
    try:
        return Locale.parse(locale)
    except (ValueError, TypeError, UnknownLocaleError) as ex:
        logging.warning(f'Invalid locale "{locale}", falling back to {DEFAULT_LOCALE}: {ex}')
        return Locale.parse(DEFAULT_LOCALE)


def format_currency_value(value: Number, locale: str) -> str:
    """
    Format a number as a two-decimal currency string based on the locale's default currency.

    The currency's own precision is ignored so every amount renders with two decimals.

    Args:
        value: The numeric value to be formatted.
        locale (str): Locale string, e.g. 'en_US'.

    Returns:
        str: The formatted currency string, e.g. '$1,234.50'.
    """
    locale_obj = _parse_locale(locale)
    currency_code = get_currency_from_locale(str(locale_obj))
    amount = Decimal(value)

    # Quantizing needs a digit of precision for every integer and cent place
    with localcontext() as ctx:
        if amount.is_finite():
            ctx.prec = max(ctx.prec, amount.adjusted() + 3)
        return numbers.format_currency(
            amount.quantize(Decimal('0.01')),
            currency=currency_code,
            locale=locale_obj,
            currency_digits=False,
        )


def format_signed_currency_value(value: Number, locale: str) -> str:
    """
    Format a currency value with an explicit '+' sign for non-negative values.

    Args:
        value: The numeric value to be formatted.
        locale (str): Locale string, e.g. 'en_US'.

    Returns:
        str: E.g. '+$12.00' or '-$3.50'.
    """
    formatted = format_currency_value(value, locale)
    if value >= 0:
        return f'+{formatted}'
    return formatted


def format_month(yearmonth: str, locale: str) -> str:
    """
    Format a 'YYYY-MM' month bucket as a human-readable month and year.

    Args:
        yearmonth (str): Month bucket, e.g. '2024-01'.
        locale (str): Locale string, e.g. 'en_US'.

    Returns:
        str: E.g. 'January 2024'.
    """
    d = datetime.date(int(yearmonth[:4]), int(yearmonth[5:7]), 1)
    return dates.format_date(d, format='LLLL y', locale=_parse_locale(locale))


def format_date_value(value: str, locale: str) -> str:
    """
    Format an ISO date string using the locale's short date format.

    Args:
        value (str): Date string, e.g. '2024-01-15'.
        locale (str): Locale string, e.g. 'en_US'.

    Returns:
        str: The formatted date, or the original string if it is not an ISO date.
    """
    try:
        d = datetime.date.fromisoformat(value)
    except (TypeError, ValueError):
        return f'{value}'
    return dates.format_date(d, format='short', locale=_parse_locale(locale))
