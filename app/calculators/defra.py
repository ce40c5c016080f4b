"""DEFRA conversion-factor arithmetic."""
from dataclasses import dataclass
from typing import Any

from app.calculators.gwp import GWP_100


@dataclass
class DefraResult:
    co2_emissions: float
    ch4_emissions: float
    n2o_emissions: float
    total_co2e: float
    category: str
    scope: str


def calculate_defra(quantity: float, factor: Any) -> DefraResult:
    """
    Apply a DEFRA factor to an activity quantity.

    When the factor carries a per-gas split the total is rebuilt from the gases
    with AR5 GWPs, otherwise the published CO2e factor is used directly.
    """
    co2 = quantity * (factor.co2_factor or 0)
    ch4 = quantity * (factor.ch4_factor or 0)
    n2o = quantity * (factor.n2o_factor or 0)

    has_gas_split = any(
        value is not None
        for value in (factor.co2_factor, factor.ch4_factor, factor.n2o_factor)
    )
    if has_gas_split:
        total = co2 + GWP_100["CH4"] * ch4 + GWP_100["N2O"] * n2o
    else:
        total = quantity * (factor.co2e_factor or 0)

    return DefraResult(
        co2_emissions=co2,
        ch4_emissions=ch4,
        n2o_emissions=n2o,
        total_co2e=total,
        category=factor.level1_category or factor.activity_name,
        scope=factor.scope,
    )


FUEL_KEYWORDS = ("fuel", "gas", "petrol", "diesel")
BUSINESS_TRAVEL_KEYWORDS = ("travel", "flight", "vehicle", "car")
MATERIAL_USE_KEYWORDS = ("material", "paper", "plastic")
WASTE_KEYWORDS = ("waste", "landfill", "recycling")


def _matches(category: str, keywords: tuple[str, ...]) -> bool:
    lowered = category.lower()
    return any(keyword in lowered for keyword in keywords)


def summarize_defra(calculations: list[Any]) -> dict[str, float | int]:
    """Reduce DEFRA calculation rows into the project summary totals."""
    totals: dict[str, float | int] = {
        "scope1_total": 0.0,
        "scope2_total": 0.0,
        "scope3_total": 0.0,
        "fuels_total": 0.0,
        "business_travel_total": 0.0,
        "material_use_total": 0.0,
        "waste_total": 0.0,
        "total_co2e": 0.0,
        "calculation_count": len(calculations),
    }
    scope_keys = {
        "Scope 1": "scope1_total",
        "Scope 2": "scope2_total",
        "Scope 3": "scope3_total",
    }

    for calc in calculations:
        value = calc.total_co2e or 0
        totals["total_co2e"] += value

        scope_key = scope_keys.get(calc.scope)
        if scope_key:
            totals[scope_key] += value

        category = calc.category or ""
        if _matches(category, FUEL_KEYWORDS):
            totals["fuels_total"] += value
        if _matches(category, BUSINESS_TRAVEL_KEYWORDS):
            totals["business_travel_total"] += value
        if _matches(category, MATERIAL_USE_KEYWORDS):
            totals["material_use_total"] += value
        if _matches(category, WASTE_KEYWORDS):
            totals["waste_total"] += value

    return totals
