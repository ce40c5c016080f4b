"""
IPCC 2006 Guidelines arithmetic: energy conversion, factor and gas choice,
tier helpers and the built-in category catalogue.
"""
from dataclasses import dataclass, field
from typing import Any, Sequence

from app.core.exceptions import BadRequestError

TIER_ORDER = ("TIER_3", "TIER_2", "TIER_1")

# activity unit -> marker expected in the factor's heating value unit
_HEATING_VALUE_UNITS = {
    "ton": "/ton",
    "m3": "/m3",
    "liter": "/liter",
}

_ENERGY_METHODS = {
    "TIER_3": ("TIER_3_ENERGY_DETAILED", "Activity x Heating Value x Emission Factor (facility-specific)"),
    "TIER_2": ("TIER_2_ENERGY_IMPROVED", "Activity x Heating Value x Emission Factor (country-specific)"),
    "TIER_1": ("TIER_1_ENERGY_WITH_HV", "Activity x Heating Value x Emission Factor"),
}

_BASIC_METHODS = {
    "TIER_3": ("TIER_3_DETAILED", "Activity x Emission Factor (facility-specific measurements)"),
    "TIER_2": ("TIER_2_INTERMEDIATE", "Activity x Emission Factor (country/region-specific)"),
    "TIER_1": ("TIER_1_BASIC", "Activity x Emission Factor (IPCC default)"),
}


@dataclass
class IpccResult:
    emission_value: float
    co2_equivalent: float
    method: str
    formula: str
    details: dict[str, Any] = field(default_factory=dict)


def calculate_emission(
    activity_value: float,
    activity_unit: str,
    factor: Any,
    sector: str,
    gwp_value: float,
) -> IpccResult:
    """
    Compute the emission of one activity with one factor.

    ``factor`` needs ``value``, ``unit``, ``tier``, ``heating_value`` and
    ``heating_value_unit`` attributes. Results are in kg of the factor's gas.
    """
    tier = factor.tier if factor.tier in TIER_ORDER else "TIER_1"
    details: dict[str, Any] = {
        "activity_value": activity_value,
        "factor_value": factor.value,
        "gwp_value": gwp_value,
        "tier": tier,
        "sector": sector,
    }

    if sector == "ENERGY" and factor.heating_value:
        marker = _HEATING_VALUE_UNITS.get(activity_unit)
        if marker and marker in (factor.heating_value_unit or ""):
            energy = activity_value * factor.heating_value  # GJ
            details["unit_conversion"] = (
                f"{activity_value} {activity_unit} x {factor.heating_value} "
                f"{factor.heating_value_unit} = {energy} GJ"
            )
        else:
            energy = activity_value
            details["unit_conversion"] = f"Activity already in energy units: {energy} GJ"

        if "/TJ" in factor.unit:
            emission = energy / 1000 * factor.value
        else:
            emission = energy * factor.value

        details["energy_content"] = energy
        details["heating_value"] = factor.heating_value
        method, formula = _ENERGY_METHODS[tier]
    else:
        emission = activity_value * factor.value
        method, formula = _BASIC_METHODS[tier]

    if emission < 0:
        raise BadRequestError("Calculated emission value cannot be negative")

    return IpccResult(
        emission_value=emission,
        co2_equivalent=emission * gwp_value,
        method=method,
        formula=formula,
        details=details,
    )


def select_best_factor(
    factors: Sequence[Any], category_code: str, preferred_tier: str | None = None
) -> Any | None:
    """Pick a factor for a category: category match first, then tier preference."""
    if not factors:
        return None

    matching = [f for f in factors if category_code in (f.applicable_categories or [])]
    candidates = matching or list(factors)

    if preferred_tier and preferred_tier != "AUTO":
        for factor in candidates:
            if factor.tier == preferred_tier:
                return factor

    for tier in TIER_ORDER:
        for factor in candidates:
            if factor.tier == tier:
                return factor

    return candidates[0]


def best_gas_type(category_code: str) -> str:
    """Main greenhouse gas reported for a category code."""
    if category_code.startswith(("1.A", "1.B")):
        return "CO2"
    if category_code.startswith("3.A"):
        return "CH4"
    if category_code.startswith(("3.C.4", "3.C.5")):
        return "N2O"
    if category_code.startswith(("4.A", "4.B")):
        return "CH4"
    if category_code.startswith("4.D"):
        return "N2O"
    return "CO2"


UNCERTAINTY_BY_TIER = {
    "TIER_3": {"range": "±15%", "confidence": "High"},
    "TIER_2": {"range": "±50%", "confidence": "Medium"},
    "TIER_1": {"range": "±150%", "confidence": "Low"},
}


def uncertainty_for_tier(tier: str) -> dict[str, str]:
    return UNCERTAINTY_BY_TIER.get(tier, UNCERTAINTY_BY_TIER["TIER_1"])


DEFAULT_HEATING_VALUES = {  # GJ/ton
    "coal": 25.8,
    "oil": 42.3,
    "natural_gas": 52.2,
    "diesel": 43.0,
    "gasoline": 44.3,
}

DEFAULT_CO2_FACTORS = {  # kg CO2/GJ
    "coal": 94.6,
    "oil": 73.3,
    "natural_gas": 56.1,
    "diesel": 74.1,
    "gasoline": 69.3,
}


def default_factors() -> dict[str, dict[str, float]]:
    return {
        "heating_values": dict(DEFAULT_HEATING_VALUES),
        "co2_emission_factors": dict(DEFAULT_CO2_FACTORS),
    }


def suggest_tier(
    category_code: str,
    has_country_specific_data: bool = False,
    has_plant_specific_data: bool = False,
    is_key_category: bool = False,
) -> str:
    """Recommend a methodological tier from data availability."""
    if category_code.startswith("1.A"):
        if has_plant_specific_data and is_key_category:
            return "TIER_3"
        if has_country_specific_data:
            return "TIER_2"
        return "TIER_1"

    if is_key_category and has_country_specific_data:
        return "TIER_2"
    if has_plant_specific_data:
        return "TIER_3"
    return "TIER_1"


# (code, name, sector)
CATEGORY_CATALOGUE: list[tuple[str, str, str]] = [
    ("1.A.1", "Energy Industries", "ENERGY"),
    ("1.A.1.a", "Public Electricity and Heat Production", "ENERGY"),
    ("1.A.2", "Manufacturing Industries and Construction", "ENERGY"),
    ("1.A.3", "Transport", "ENERGY"),
    ("1.A.3.a", "Civil Aviation", "ENERGY"),
    ("1.A.3.b", "Road Transportation", "ENERGY"),
    ("1.A.3.c", "Railways", "ENERGY"),
    ("1.A.3.d", "Water-borne Navigation", "ENERGY"),
    ("1.A.4", "Other Sectors", "ENERGY"),
    ("1.A.4.a", "Commercial/Institutional", "ENERGY"),
    ("1.A.4.b", "Residential", "ENERGY"),
    ("1.A.4.c", "Agriculture/Forestry/Fishing", "ENERGY"),
    ("1.A.5", "Non-Specified", "ENERGY"),
    ("1.B.1", "Solid Fuels - Fugitive Emissions", "ENERGY"),
    ("1.B.2", "Oil and Natural Gas - Fugitive Emissions", "ENERGY"),
    ("2.A", "Mineral Industry", "IPPU"),
    ("2.A.1", "Cement Production", "IPPU"),
    ("2.A.2", "Lime Production", "IPPU"),
    ("2.B", "Chemical Industry", "IPPU"),
    ("2.C", "Metal Industry", "IPPU"),
    ("2.C.1", "Iron and Steel Production", "IPPU"),
    ("2.D", "Non-Energy Products from Fuels and Solvent Use", "IPPU"),
    ("2.E", "Electronics Industry", "IPPU"),
    ("2.F", "Product Uses as Substitutes for ODS", "IPPU"),
    ("2.F.1", "Refrigeration and Air Conditioning", "IPPU"),
    ("2.G", "Other Product Manufacture and Use", "IPPU"),
    ("3.A", "Livestock", "AFOLU"),
    ("3.A.1", "Enteric Fermentation", "AFOLU"),
    ("3.A.2", "Manure Management", "AFOLU"),
    ("3.B", "Land", "AFOLU"),
    ("3.B.1", "Forest Land", "AFOLU"),
    ("3.B.2", "Cropland", "AFOLU"),
    ("3.B.3", "Grassland", "AFOLU"),
    ("3.C", "Aggregate sources and non-CO2 emissions sources on land", "AFOLU"),
    ("3.C.1", "Emissions from biomass burning", "AFOLU"),
    ("3.C.4", "Direct N2O Emissions from managed soils", "AFOLU"),
    ("3.C.5", "Indirect N2O Emissions from managed soils", "AFOLU"),
    ("3.D", "Other", "AFOLU"),
    ("4.A", "Solid Waste Disposal", "WASTE"),
    ("4.B", "Biological Treatment of Solid Waste", "WASTE"),
    ("4.C", "Incineration and Open Burning of Waste", "WASTE"),
    ("4.D", "Wastewater Treatment and Discharge", "WASTE"),
    ("4.D.1", "Domestic Wastewater", "WASTE"),
    ("4.D.2", "Industrial Wastewater", "WASTE"),
    ("5.A", "Indirect N2O emissions from atmospheric deposition", "OTHER"),
    ("5.B", "Other", "OTHER"),
]


def summarize_sector(calculations: Sequence[Any]) -> dict[str, float]:
    """Per-gas totals (kg) and CO2e total for the calculations of one sector."""
    totals = {
        "total_co2": 0.0,
        "total_ch4": 0.0,
        "total_n2o": 0.0,
        "total_other_gases": 0.0,
        "total_co2_equivalent": 0.0,
    }
    gas_keys = {"CO2": "total_co2", "CH4": "total_ch4", "N2O": "total_n2o"}
    for calc in calculations:
        key = gas_keys.get(calc.gas_type)
        if key:
            totals[key] += calc.emission_value
        else:
            totals["total_other_gases"] += calc.co2_equivalent
        totals["total_co2_equivalent"] += calc.co2_equivalent
    return totals
