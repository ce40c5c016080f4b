from app.calculators.gwp import GWP_100, IPCC_GWP_SEED, get_gwp
from app.calculators.defra import calculate_defra, summarize_defra
from app.calculators.gas_factor import (
    FactorInput,
    calculate_with_factor,
    factor_from_record,
    ISO_REFERENCE_FACTORS,
)
from app.calculators.iscc import calculate_iscc
from app.calculators.factor_selection import (
    FactorQuery,
    KeywordFactorSelector,
    GeminiFactorSelector,
    get_factor_selector,
)

__all__ = [
    "GWP_100",
    "IPCC_GWP_SEED",
    "get_gwp",
    "calculate_defra",
    "summarize_defra",
    "FactorInput",
    "calculate_with_factor",
    "factor_from_record",
    "ISO_REFERENCE_FACTORS",
    "calculate_iscc",
    "FactorQuery",
    "KeywordFactorSelector",
    "GeminiFactorSelector",
    "get_factor_selector",
]
