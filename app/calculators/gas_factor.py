"""
Single-gas factor arithmetic shared by GHG Protocol and ISO 14064.

emission = quantity x factor, co2e = emission x GWP(gas).
"""
from dataclasses import dataclass, field, asdict
from typing import Any

from app.calculators.gwp import get_gwp
from app.core.exceptions import BadRequestError

GAS_FACTOR_ATTRIBUTES = {
    "CO2": "co2_factor",
    "CH4": "ch4_factor",
    "N2O": "n2o_factor",
}


@dataclass
class FactorInput:
    value: float
    unit: str
    gas_type: str | None = None
    source: str | None = None
    activity_name: str | None = None
    factor_id: str | None = None


@dataclass
class GasFactorResult:
    gas_type: str
    emission_value: float
    gwp_value: float
    co2_equivalent: float
    calculation_method: str
    emission_factor: dict[str, Any]
    formula: str
    explanation: str


def calculate_with_factor(
    quantity: float,
    unit: str,
    factor: FactorInput,
    gas_type: str | None = None,
    method: str | None = None,
) -> GasFactorResult:
    """Apply one factor to an activity quantity and convert to CO2e."""
    if quantity < 0:
        raise BadRequestError("Activity quantity cannot be negative")

    gas = gas_type or factor.gas_type or "CO2"
    gwp = get_gwp(gas)
    emission = quantity * factor.value
    co2e = emission * gwp
    source = factor.source or "Provided"

    snapshot = {
        "value": factor.value,
        "unit": factor.unit,
        "gas_type": gas,
        "source": source,
    }
    if factor.activity_name:
        snapshot["activity_name"] = factor.activity_name
    if factor.factor_id:
        snapshot["id"] = factor.factor_id

    return GasFactorResult(
        gas_type=gas,
        emission_value=emission,
        gwp_value=gwp,
        co2_equivalent=co2e,
        calculation_method=method or "custom",
        emission_factor=snapshot,
        formula=f"{quantity} {unit} x {factor.value} {factor.unit} x {gwp} (GWP {gas})",
        explanation=(
            f"{quantity} {unit} multiplied by the {source} factor of {factor.value} "
            f"{factor.unit} gives {emission:.4f} kg {gas}, "
            f"which is {co2e:.4f} kg CO2e with a GWP of {gwp}."
        ),
    )


def factor_from_record(record: Any, gas_type: str | None = None) -> FactorInput:
    """
    Build a FactorInput from a stored or reference factor for a given gas.

    CO2 falls back to the record's CO2e factor when no pure CO2 factor exists.
    """
    gas = gas_type or "CO2"
    attribute = GAS_FACTOR_ATTRIBUTES.get(gas)
    value = getattr(record, attribute, None) if attribute else None
    if value is None and gas == "CO2":
        value = getattr(record, "co2e_factor", None)
    if value is None:
        raise BadRequestError(f"Emission factor has no value for {gas}")

    record_id = getattr(record, "id", None)
    return FactorInput(
        value=value,
        unit=record.unit,
        gas_type=gas,
        source=getattr(record, "source", None),
        activity_name=getattr(record, "activity_name", None),
        factor_id=str(record_id) if record_id else None,
    )


@dataclass
class ReferenceFactor:
    """An entry of the built-in ISO 14064 reference catalogue (kg CO2e per unit)."""

    activity_name: str
    scope: str
    category: str
    unit: str
    co2e_factor: float
    keywords: list[str] = field(default_factory=list)
    source: str = "ISO 14064 reference catalogue"
    co2_factor: float | None = None
    ch4_factor: float | None = None
    n2o_factor: float | None = None
    id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


ISO_REFERENCE_FACTORS: list[ReferenceFactor] = [
    # Scope 1
    ReferenceFactor("Natural gas", "Scope1", "stationary_combustion", "m3", 2.0, ["natural gas", "gas", "boiler"]),
    ReferenceFactor("Natural gas (energy)", "Scope1", "stationary_combustion", "kWh", 0.2, ["natural gas", "gas"]),
    ReferenceFactor("Diesel", "Scope1", "mobile_combustion", "L", 2.68, ["diesel", "gasoil", "generator"]),
    ReferenceFactor("Petrol", "Scope1", "mobile_combustion", "L", 2.31, ["petrol", "gasoline"]),
    ReferenceFactor("Coal", "Scope1", "stationary_combustion", "kg", 2.6, ["coal"]),
    ReferenceFactor("LPG", "Scope1", "stationary_combustion", "kg", 1.5, ["lpg", "propane", "butane"]),
    ReferenceFactor("CNG", "Scope1", "mobile_combustion", "m3", 2.0, ["cng", "compressed natural gas"]),
    # Scope 2
    ReferenceFactor("Grid electricity", "Scope2", "purchased_electricity", "kWh", 0.5, ["electricity", "grid", "power"]),
    ReferenceFactor("Renewable electricity", "Scope2", "purchased_electricity", "kWh", 0.0, ["renewable", "solar", "wind"]),
    # Scope 3
    ReferenceFactor("Air travel (short-haul)", "Scope3", "business_travel", "km", 0.25, ["flight", "air", "short-haul", "domestic"]),
    ReferenceFactor("Air travel (long-haul)", "Scope3", "business_travel", "km", 0.15, ["flight", "air", "long-haul", "international"]),
    ReferenceFactor("Car (petrol)", "Scope3", "business_travel", "km", 0.2, ["car", "petrol", "vehicle"]),
    ReferenceFactor("Car (diesel)", "Scope3", "business_travel", "km", 0.17, ["car", "diesel", "vehicle"]),
    ReferenceFactor("Train", "Scope3", "business_travel", "km", 0.04, ["train", "rail"]),
    ReferenceFactor("Waste to landfill", "Scope3", "waste_generated", "kg", 0.75, ["landfill", "waste"]),
    ReferenceFactor("Waste incineration", "Scope3", "waste_generated", "kg", 0.4, ["incineration", "waste"]),
    ReferenceFactor("Waste recycling", "Scope3", "waste_generated", "kg", 0.15, ["recycling", "recycled", "waste"]),
]


def reference_candidates(scope: str | None = None, category: str | None = None) -> list[ReferenceFactor]:
    """Return reference factors narrowed by scope and category when those narrow anything."""
    candidates = ISO_REFERENCE_FACTORS
    if scope:
        candidates = [f for f in candidates if f.scope == scope] or candidates
    if category:
        candidates = [f for f in candidates if f.category == category] or candidates
    return list(candidates)


def summarize_gas_calculations(calculations: list[Any]) -> dict[str, Any]:
    """Scope totals plus CO2e breakdowns by gas, category and Scope 3 category."""
    summary: dict[str, Any] = {
        "scope1_total": 0.0,
        "scope2_total": 0.0,
        "scope3_total": 0.0,
        "total_emissions": 0.0,
        "breakdown_by_gas": {},
        "breakdown_by_category": {},
        "scope3_breakdown": {},
        "calculation_count": len(calculations),
    }
    scope_keys = {"Scope1": "scope1_total", "Scope2": "scope2_total", "Scope3": "scope3_total"}

    for calc in calculations:
        value = calc.co2_equivalent or 0
        summary["total_emissions"] += value
        scope_key = scope_keys.get(calc.scope)
        if scope_key:
            summary[scope_key] += value

        by_gas = summary["breakdown_by_gas"]
        by_gas[calc.gas_type] = by_gas.get(calc.gas_type, 0) + value
        by_category = summary["breakdown_by_category"]
        by_category[calc.category] = by_category.get(calc.category, 0) + value
        if calc.scope == "Scope3":
            scope3 = summary["scope3_breakdown"]
            scope3[calc.category] = scope3.get(calc.category, 0) + value

    return summary
