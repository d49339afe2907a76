"""Retailer brand name canonicalisation."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

BRAND_TABLE: Mapping[str, str] = MappingProxyType(
    {
        "applegreen": "Applegreen",
        "asda express": "ASDA Express",
        "asda": "ASDA",
        "bp": "BP",
        "coop": "Co Op",
        "essar": "Essar",
        "esso": "Esso",
        "gulf": "Gulf",
        "harvest energy": "Harvest Energy",
        "jet": "JET",
        "morrisons": "Morrisons",
        "murco": "Murco",
        "sainsbury's": "Sainsbury's",
        "shell": "Shell",
        "tesco": "Tesco",
        "texaco": "Texaco",
    }
)


def _lookup_key(brand: str) -> str:
    return brand.strip().lower()


def build_brand_table(aliases: Mapping[str, str] | None = None) -> Mapping[str, str]:
    """Return a read-only table with configured aliases layered over the defaults."""
    if not aliases:
        return BRAND_TABLE
    merged = dict(BRAND_TABLE)
    for raw, canonical in aliases.items():
        merged[_lookup_key(raw)] = canonical
    return MappingProxyType(merged)


def canonicalise_brand(brand: str, table: Mapping[str, str] = BRAND_TABLE) -> str:
    # Unknown brands come back untouched, padding and casing included.
    return table.get(_lookup_key(brand), brand)
