"""
Module for recognizing material designations and looking up density and price.
"""
import logging
import os
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_DESIGNATION = "S235"
DEFAULT_DENSITY_G_CM3 = 7.85
DEFAULT_PRICE_PER_KG = 1.50

# Density in g/cm³ by designation. Family entries (e.g. 'EN AW', 'AlMg')
# cover grades not listed explicitly.
DENSITY_TABLE = MappingProxyType({
    '1.2210': 7.85,
    '1.2379': 7.70,
    '1.2842': 7.85,
    '1.0038': 7.85,
    '1.0060': 7.85,
    '1.0503': 7.85,
    '1.7225': 7.72,
    '1.7131': 7.85,
    '1.4301': 7.90,
    '1.4305': 7.90,
    '1.4404': 8.00,
    '1.4571': 8.00,
    'C45': 7.85,
    '42CrMo4': 7.72,
    '16MnCr5': 7.85,
    'X5CrNi18-10': 7.90,
    'X8CrNiS18-9': 7.90,
    'X2CrNiMo17-12-2': 8.00,
    'X': 7.90,
    'AlMg3': 2.66,
    'AlMg4,5Mn': 2.66,
    'AlMg': 2.66,
    'EN AW-5083': 2.66,
    'EN AW-6060': 2.70,
    'EN AW-6082': 2.70,
    'EN AW-7075': 2.81,
    'EN AW': 2.70,
})

# Stock price per kg by designation
PRICE_TABLE = MappingProxyType({
    '1.2210': 1.50,
    '1.0060': 1.30,
    '1.0038': 1.20,
    '1.0503': 1.45,
    '1.2379': 6.80,
    '1.2842': 3.20,
    '1.7225': 2.10,
    '1.7131': 1.90,
    '1.4301': 4.20,
    '1.4305': 4.50,
    '1.4404': 5.60,
    '1.4571': 5.90,
    'C45': 1.45,
    '42CrMo4': 2.10,
    '16MnCr5': 1.90,
    'X5CrNi18-10': 4.20,
    'X8CrNiS18-9': 4.50,
    'X2CrNiMo17-12-2': 5.60,
    'X': 4.20,
    'AlMg3': 4.60,
    'AlMg': 4.60,
    'EN AW-5083': 4.80,
    'EN AW-6060': 4.20,
    'EN AW-6082': 4.40,
    'EN AW-7075': 7.50,
    'EN AW': 4.40,
})


@dataclass(frozen=True)
class MaterialRecord:
    designation: str
    density_g_cm3: float
    price_per_kg: float
    is_default: bool = False


def _canon_en_aw(m):
    return f"EN AW-{m.group(1)}" if m.group(1) else "EN AW"


_STRUCTURAL_STEELS = ('S235', 'S275', 'S355', 'C45', '42CrMo4', '16MnCr5')

# Ordered designation patterns: (name, compiled regex, canonicalizer)
MATERIAL_PATTERNS: List[tuple] = [
    ('tool_steel_number', re.compile(r'(?<![\w.,])1\.\d{4}(?!\d|[.,]\d)'), lambda m: m.group(0)),
    ('structural_steel',
     re.compile(r'(?<![\w.])(' + '|'.join(_STRUCTURAL_STEELS) + r')(?!\d|[.,]\d)', re.IGNORECASE),
     lambda m: next(s for s in _STRUCTURAL_STEELS if s.upper() == m.group(1).upper())),
    ('stainless_steel', re.compile(r'(?<![\w.])X\d+CrNi(?:Mo|S)?\d*(?:-\d+)*'), lambda m: m.group(0)),
    ('aluminium_almg', re.compile(r'(?<![\w.])AlMg\d*(?:[.,]\d+)?(?:Mn)?', re.IGNORECASE),
     lambda m: 'AlMg' + m.group(0)[4:]),
    ('aluminium_en_aw', re.compile(r'(?<![\w.])EN[\s-]*AW(?:[\s-]*(\d{4}))?', re.IGNORECASE), _canon_en_aw),
]


def match_designation(line: str) -> Optional[str]:
    """Return the designation from the first pattern matching this line, if any."""
    for name, pattern, canon in MATERIAL_PATTERNS:
        m = pattern.search(line)
        if m:
            designation = canon(m)
            logger.debug(f"Material pattern '{name}' matched {m.group(0)!r} -> {designation}")
            return designation
    return None


def _relaxed_lookup(table: Mapping[str, float], designation: str) -> Optional[float]:
    if designation in table:
        return table[designation]
    upper = designation.upper()
    for key, value in table.items():
        if key.upper() == upper:
            return value
    # Family match: longest table key that prefixes the designation
    prefixes = [k for k in table.keys() if upper.startswith(k.upper())]
    if prefixes:
        return table[max(prefixes, key=len)]
    return None


class MaterialCatalog:
    """
    Read-only density and price tables. Built once at startup and shared
    by every analysis.
    """

    def __init__(self, densities: Optional[Mapping[str, float]] = None,
                 prices: Optional[Mapping[str, float]] = None,
                 source: str = "built-in"):
        self.densities = MappingProxyType(dict(DENSITY_TABLE if densities is None else densities))
        self.prices = MappingProxyType(dict(PRICE_TABLE if prices is None else prices))
        self.source = source

    def lookup(self, designation: Optional[str]) -> MaterialRecord:
        """Resolve density and price; unknown designations get generic steel values."""
        is_default = not designation
        designation = designation or DEFAULT_DESIGNATION

        density = _relaxed_lookup(self.densities, designation)
        if density is None:
            logger.info(f"No density for {designation}, using default {DEFAULT_DENSITY_G_CM3} g/cm3")
            density = DEFAULT_DENSITY_G_CM3

        price = _relaxed_lookup(self.prices, designation)
        if price is None:
            logger.info(f"No price for {designation}, using default {DEFAULT_PRICE_PER_KG}/kg")
            price = DEFAULT_PRICE_PER_KG

        return MaterialRecord(designation=designation, density_g_cm3=density,
                              price_per_kg=price, is_default=is_default)

    def to_rows(self) -> List[Dict[str, object]]:
        designations = sorted(set(self.densities) | set(self.prices))
        return [
            {
                'designation': d,
                'density': self.densities.get(d, DEFAULT_DENSITY_G_CM3),
                'pricePerKg': self.prices.get(d, DEFAULT_PRICE_PER_KG),
            }
            for d in designations
        ]


DEFAULT_CATALOG = MaterialCatalog()


def resolve_material(lines: Iterable[str], catalog: Optional[MaterialCatalog] = None) -> MaterialRecord:
    """
    Scan lines in order; the first line containing a known designation
    decides. Falls back to the default structural steel.
    """
    catalog = catalog or DEFAULT_CATALOG
    for line in lines:
        designation = match_designation(line)
        if designation:
            logger.info(f"Material found: {designation} (line {line!r})")
            return catalog.lookup(designation)

    logger.warning(f"No material designation found, using default {DEFAULT_DESIGNATION}")
    return catalog.lookup(None)


def _to_float(val) -> Optional[float]:
    if val is None or pd.isna(val):
        return None
    try:
        return float(str(val).strip().replace(',', '.'))
    except ValueError:
        return None


def load_material_catalog(path: Optional[str] = None) -> MaterialCatalog:
    """
    Load the material catalog, overlaying an optional Excel/CSV sheet with
    columns DESIGNATION, DENSITY, PRICE_PER_KG on the built-in tables.
    """
    if not path:
        logger.info(f"Using built-in material tables ({len(DENSITY_TABLE)} densities, {len(PRICE_TABLE)} prices)")
        return MaterialCatalog()

    try:
        if os.path.splitext(path)[1].lower() in ('.xlsx', '.xls'):
            material_df = pd.read_excel(path, dtype=str)
        else:
            material_df = pd.read_csv(path, dtype=str)
    except (FileNotFoundError, ValueError, OSError) as e:
        logger.error(f"Could not read material table {path}: {e}. Using built-in tables.")
        return MaterialCatalog()

    material_df.columns = material_df.columns.str.strip().str.upper()
    if 'DESIGNATION' not in material_df.columns:
        logger.error(f"Material table {path} has no DESIGNATION column. Using built-in tables.")
        return MaterialCatalog()

    densities = dict(DENSITY_TABLE)
    prices = dict(PRICE_TABLE)
    for _, row in material_df.iterrows():
        designation = str(row['DESIGNATION']).strip()
        if not designation or designation.lower() == 'nan':
            continue
        density = _to_float(row.get('DENSITY'))
        price = _to_float(row.get('PRICE_PER_KG'))
        if density is not None and density <= 0:
            logger.warning(f"Ignoring non-positive density {density} for {designation} in {path}")
            density = None
        if price is not None and price <= 0:
            logger.warning(f"Ignoring non-positive price {price} for {designation} in {path}")
            price = None
        if density is not None:
            densities[designation] = density
        if price is not None:
            prices[designation] = price

    logger.info(f"Loaded material table from {path} with {len(material_df)} entries")
    return MaterialCatalog(densities, prices, source=path)
