"""Tests for emission factor selection."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.calculators.factor_selection import (
    FactorQuery,
    GeminiFactorSelector,
    KeywordFactorSelector,
    describe,
    get_factor_selector,
)
from app.core.exceptions import BadRequestError

DIESEL = SimpleNamespace(activity_name="Diesel (100% mineral diesel)", level1_category="Fuels", unit="litres")
PETROL = SimpleNamespace(activity_name="Petrol (average biofuel blend)", level1_category="Fuels", unit="litres")
ELECTRICITY = SimpleNamespace(activity_name="Electricity generated", level1_category="UK electricity", unit="kWh")


class TestKeywordFactorSelector:
    """Tests for KeywordFactorSelector."""

    @pytest.mark.asyncio
    async def test_picks_best_word_overlap(self):
        selector = KeywordFactorSelector()

        chosen = await selector.select(FactorQuery(text="mineral diesel for tractors", unit="litres"), [PETROL, DIESEL])

        assert chosen is DIESEL

    @pytest.mark.asyncio
    async def test_unit_breaks_ties(self):
        selector = KeywordFactorSelector()

        chosen = await selector.select(FactorQuery(text="site energy", unit="kWh"), [DIESEL, ELECTRICITY])

        assert chosen is ELECTRICITY

    @pytest.mark.asyncio
    async def test_no_candidates(self):
        with pytest.raises(BadRequestError):
            await KeywordFactorSelector().select(FactorQuery(text="diesel"), [])


def test_describe_includes_keywords():
    candidate = SimpleNamespace(activity_name="Train", category="business_travel", keywords=["rail"])

    assert describe(candidate) == "Train business_travel rail"


class TestGeminiFactorSelector:
    """Tests for GeminiFactorSelector with the Gemini client mocked out."""

    @pytest.mark.parametrize(
        "raw,index",
        [('{"index": 2}', 2), ('```json\n{"index": 1}\n```', 1), (' {"index": 0} ', 0)],
    )
    def test_parse_index(self, raw, index):
        assert GeminiFactorSelector.parse_index(raw) == index

    @pytest.mark.asyncio
    @patch("app.calculators.factor_selection.genai")
    async def test_uses_model_answer(self, mock_genai):
        model = MagicMock()
        model.generate_content_async = AsyncMock(return_value=SimpleNamespace(text='{"index": 1}'))
        mock_genai.GenerativeModel.return_value = model

        selector = GeminiFactorSelector("key", "gemini-test")
        chosen = await selector.select(FactorQuery(text="petrol"), [DIESEL, ELECTRICITY])

        assert chosen is ELECTRICITY
        mock_genai.configure.assert_called_once_with(api_key="key")

    @pytest.mark.asyncio
    @patch("app.calculators.factor_selection.genai")
    async def test_out_of_range_falls_back_to_keywords(self, mock_genai):
        model = MagicMock()
        model.generate_content_async = AsyncMock(return_value=SimpleNamespace(text='{"index": 7}'))
        mock_genai.GenerativeModel.return_value = model

        selector = GeminiFactorSelector("key", "gemini-test")
        chosen = await selector.select(FactorQuery(text="grid electricity", unit="kWh"), [DIESEL, ELECTRICITY])

        assert chosen is ELECTRICITY

    @pytest.mark.asyncio
    @patch("app.calculators.factor_selection.genai")
    async def test_api_error_falls_back_to_keywords(self, mock_genai):
        model = MagicMock()
        model.generate_content_async = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        mock_genai.GenerativeModel.return_value = model

        selector = GeminiFactorSelector("key", "gemini-test")
        chosen = await selector.select(FactorQuery(text="diesel", unit="litres"), [ELECTRICITY, DIESEL])

        assert chosen is DIESEL


def test_keyword_selector_without_api_key():
    assert isinstance(get_factor_selector(), KeywordFactorSelector)
