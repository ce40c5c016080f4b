"""
ISCC PLUS / ISCC EU (GHG 205) default-value calculation.

Component emissions are first computed in kg CO2e, then expressed per MJ of
product: g/MJ = kg / (production kg x LHV MJ/kg) x 1000.
"""
from dataclasses import dataclass, field
from typing import Any

from app.core.exceptions import BadRequestError

FOSSIL_FUEL_BASELINE = 83.8  # g CO2e/MJ

# kg CO2e per unit of input
CULTIVATION_FACTORS = {
    "nitrogen_fertilizer": 6.38,  # per kg N
    "diesel_consumption": 2.68,  # per L
    "electricity_use": 0.5,  # per kWh
}
CULTIVATION_UNFACTORED = (
    "phosphate_fertilizer",
    "potassium_fertilizer",
    "organic_fertilizer",
    "pesticides",
)

PROCESSING_FACTORS = {
    "electricity_use": 0.5,  # per kWh
    "natural_gas_use": 2.0,  # per m3
    "diesel_use": 2.68,  # per L
    "methanol": 1.38,  # per kg
    "steam_use": 0.2,  # per kg, input in ton
}
PROCESSING_UNFACTORED = ("catalyst", "acid", "water_consumption")

TRANSPORT_FACTORS = {  # kg CO2e per t.km
    "truck": 0.1,
    "ship": 0.01,
    "rail": 0.02,
}


@dataclass
class IsccResult:
    eec_kg: float
    ep_kg: float
    etd_kg: float
    el_kg: float | None
    eccr_kg: float | None
    total_kg: float
    eec: float
    ep: float
    etd: float
    el: float | None
    eccr: float | None
    total_emissions: float
    fossil_fuel_baseline: float
    ghg_savings: float
    production_kg: float
    breakdown: dict[str, Any] = field(default_factory=dict)
    assumptions: list[str] = field(default_factory=list)


def production_kg(project: dict, cultivation: dict | None) -> float | None:
    """Annual production in kg, from production volume or yield x land area."""
    if project.get("production_volume"):
        return project["production_volume"] * 1000
    if cultivation and cultivation.get("yield_per_ha") and cultivation.get("land_area"):
        return cultivation["yield_per_ha"] * cultivation["land_area"] * 1000
    return None


def _cultivation_kg(cultivation: dict | None, assumptions: list[str]) -> tuple[float, dict]:
    if not cultivation:
        assumptions.append("No cultivation data; eec set to 0")
        return 0.0, {}

    land_area = cultivation.get("land_area")
    if not land_area:
        assumptions.append("Cultivation land area missing; eec set to 0")
        return 0.0, {}

    items = {}
    for name, factor in CULTIVATION_FACTORS.items():
        amount = cultivation.get(name)
        if amount:
            items[name] = amount * land_area * factor
    for name in CULTIVATION_UNFACTORED:
        if cultivation.get(name):
            assumptions.append(f"No default factor for cultivation input '{name}'; excluded")
    return sum(items.values()), items


def _processing_kg(processing: dict | None, assumptions: list[str]) -> tuple[float, dict]:
    if not processing:
        assumptions.append("No processing data; ep set to 0")
        return 0.0, {}

    items = {}
    for name, factor in PROCESSING_FACTORS.items():
        amount = processing.get(name)
        if not amount:
            continue
        if name == "steam_use":
            amount = amount * 1000  # ton -> kg
        items[name] = amount * factor
    for name in PROCESSING_UNFACTORED:
        if processing.get(name):
            assumptions.append(f"No default factor for processing input '{name}'; excluded")
    return sum(items.values()), items


def _leg_kg(label: str, distance, mode, weight, assumptions: list[str]) -> float | None:
    if not distance or not weight:
        return None
    factor = TRANSPORT_FACTORS.get(mode or "")
    if factor is None:
        assumptions.append(f"No default factor for transport mode '{mode}' ({label}); excluded")
        return None
    return distance * weight * factor


def _transport_kg(transport: dict | None, assumptions: list[str]) -> tuple[float, dict]:
    if not transport:
        assumptions.append("No transport data; etd set to 0")
        return 0.0, {}

    items = {}
    legs = [
        ("feedstock", transport.get("feedstock_distance"), transport.get("feedstock_mode"), transport.get("feedstock_weight")),
        ("product", transport.get("product_distance"), transport.get("product_mode"), transport.get("product_weight")),
    ]
    for index, extra in enumerate(transport.get("additional_transport") or [], start=1):
        label = extra.get("description") or f"additional_{index}"
        legs.append((label, extra.get("distance"), extra.get("mode"), extra.get("weight")))

    for label, distance, mode, weight in legs:
        value = _leg_kg(label, distance, mode, weight, assumptions)
        if value is not None:
            items[label] = value
    return sum(items.values()), items


def calculate_iscc(
    project: dict,
    cultivation: dict | None = None,
    processing: dict | None = None,
    transport: dict | None = None,
    el: float | None = None,
    eccr: float | None = None,
) -> IsccResult:
    """
    Run the local ISCC calculation.

    ``el`` and ``eccr`` are given in g CO2e/MJ and converted back to kg for the
    stored kg components.
    """
    lhv = project.get("lhv")
    if not lhv:
        raise BadRequestError("LHV (Lower Heating Value) is required for calculation")

    production = production_kg(project, cultivation)
    if not production:
        raise BadRequestError(
            "Production quantity is required: set production volume or yield and land area"
        )

    assumptions: list[str] = []
    eec_kg, eec_items = _cultivation_kg(cultivation, assumptions)
    ep_kg, ep_items = _processing_kg(processing, assumptions)
    etd_kg, etd_items = _transport_kg(transport, assumptions)

    energy_mj = production * lhv

    def per_mj(kg: float) -> float:
        return kg / energy_mj * 1000

    def to_kg(g_per_mj: float | None) -> float | None:
        if g_per_mj is None:
            return None
        return g_per_mj * energy_mj / 1000

    eec, ep, etd = per_mj(eec_kg), per_mj(ep_kg), per_mj(etd_kg)
    total = eec + ep + etd + (el or 0) - (eccr or 0)
    el_kg, eccr_kg = to_kg(el), to_kg(eccr)
    total_kg = eec_kg + ep_kg + etd_kg + (el_kg or 0) - (eccr_kg or 0)
    savings = (FOSSIL_FUEL_BASELINE - total) / FOSSIL_FUEL_BASELINE * 100

    return IsccResult(
        eec_kg=eec_kg,
        ep_kg=ep_kg,
        etd_kg=etd_kg,
        el_kg=el_kg,
        eccr_kg=eccr_kg,
        total_kg=total_kg,
        eec=eec,
        ep=ep,
        etd=etd,
        el=el,
        eccr=eccr,
        total_emissions=total,
        fossil_fuel_baseline=FOSSIL_FUEL_BASELINE,
        ghg_savings=savings,
        production_kg=production,
        breakdown={
            "cultivation": eec_items,
            "processing": ep_items,
            "transport": etd_items,
            "energy_mj": energy_mj,
        },
        assumptions=assumptions,
    )
