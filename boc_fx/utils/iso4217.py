"""Static table of ISO 4217 alphabetic currency codes.

The table lists the active codes of the ISO 4217 maintenance list, including
fund and precious metal codes. ``XTS`` (testing) and ``XXX`` (no currency) are
left out because they never denote a convertible currency.
"""

from __future__ import annotations

from typing import Final

ISO_4217_CODES: Final[frozenset[str]] = frozenset(
    """
    AED AFN ALL AMD ANG AOA ARS AUD AWG AZN
    BAM BBD BDT BGN BHD BIF BMD BND BOB BOV BRL BSD BTN BWP BYN BZD
    CAD CDF CHE CHF CHW CLF CLP CNY COP COU CRC CUC CUP CVE CZK
    DJF DKK DOP DZD
    EGP ERN ETB EUR
    FJD FKP
    GBP GEL GHS GIP GMD GNF GTQ GYD
    HKD HNL HTG HUF
    IDR ILS INR IQD IRR ISK
    JMD JOD JPY
    KES KGS KHR KMF KPW KRW KWD KYD KZT
    LAK LBP LKR LRD LSL LYD
    MAD MDL MGA MKD MMK MNT MOP MRU MUR MVR MWK MXN MXV MYR MZN
    NAD NGN NIO NOK NPR NZD
    OMR
    PAB PEN PGK PHP PKR PLN PYG
    QAR
    RON RSD RUB RWF
    SAR SBD SCR SDG SEK SGD SHP SLE SLL SOS SRD SSP STN SVC SYP SZL
    THB TJS TMT TND TOP TRY TTD TWD TZS
    UAH UGX USD USN UYI UYU UYW UZS
    VED VES VND VUV
    WST
    XAF XAG XAU XBA XBB XBC XBD XCD XCG XDR XOF XPD XPF XPT XSU XUA
    YER
    ZAR ZMW ZWG ZWL
    """.split()
)


def all_known_iso_currency_codes() -> frozenset[str]:
    """Return every recognised ISO 4217 alphabetic code."""

    return ISO_4217_CODES


def is_iso_currency_code(code: str) -> bool:
    return code in ISO_4217_CODES


__all__ = ["ISO_4217_CODES", "all_known_iso_currency_codes", "is_iso_currency_code"]
