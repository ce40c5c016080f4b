"""Global warming potentials (100-year horizon) used by the scope-based calculators."""

GWP_100: dict[str, float] = {
    "CO2": 1,
    "CH4": 28,
    "N2O": 265,
    "HFCs": 1240,
    "PFCs": 7390,
    "SF6": 22800,
    "NF3": 16100,
}

# Initial rows of the editable IPCC GWP table
IPCC_GWP_SEED: dict[str, float] = {
    "CO2": 1,
    "CH4": 28,
    "N2O": 265,
    "HFCs": 1430,
    "PFCs": 6630,
    "SF6": 23500,
    "NF3": 16100,
}


def get_gwp(gas_type: str | None) -> float:
    """Return the 100-year GWP for a gas, treating unknown or missing gases as CO2."""
    if not gas_type:
        return GWP_100["CO2"]
    return GWP_100.get(gas_type, GWP_100["CO2"])
