import pytest

from gateway_onboard.errors import DomainError
from gateway_onboard.pricing.ratios import (
    completion_ratio_for,
    derive_ratios,
    merge_fetched,
    merge_ratio,
    model_ratio_for,
    ratio_changes,
)
from gateway_onboard.types import ModelIdentity, ParseIssue, PriceQuote, TableFetch

IDENTITY = ModelIdentity("gpt-x", "gw-gpt-x", "https://api.example.com")


@pytest.mark.parametrize(
    "inp, out, expected",
    [(2.0, 6.0, 3.0), (0.03, 0.06, 2.0), (1.0, 0.0, 0.0), (4, 1, 0.25)],
)
def test_completion_ratio_is_output_over_input(inp, out, expected):
    assert completion_ratio_for(PriceQuote(inp, out)) == pytest.approx(expected)


def test_completion_ratio_rejects_zero_input():
    with pytest.raises(DomainError, match="zero input price"):
        completion_ratio_for(PriceQuote(0.0, 6.0))


@pytest.mark.parametrize("inp, expected", [(2.5, 1.0), (5.0, 2.0), (0.25, 0.1)])
def test_model_ratio_uses_default_baseline(inp, expected):
    assert model_ratio_for(PriceQuote(inp, 1.0)) == pytest.approx(expected)


def test_model_ratio_custom_baseline():
    assert model_ratio_for(PriceQuote(3.0, 1.0), baseline=1.5) == pytest.approx(2.0)


@pytest.mark.parametrize("baseline", [0.0, -1.0, float("inf"), float("nan")])
def test_model_ratio_rejects_bad_baseline(baseline):
    with pytest.raises(DomainError):
        model_ratio_for(PriceQuote(1.0, 1.0), baseline=baseline)


@pytest.mark.parametrize("bad", [-1.0, float("nan"), float("inf"), "2.0", True])
def test_price_quote_rejects_invalid_prices(bad):
    with pytest.raises(DomainError):
        PriceQuote(bad, 1.0)


def test_derive_ratios():
    ratios = derive_ratios(PriceQuote(2.0, 6.0))
    assert ratios.completion_ratio == pytest.approx(3.0)
    assert ratios.model_ratio == pytest.approx(0.8)


def test_merge_sets_both_aliases_and_keeps_other_keys():
    table = {"other-model": 1.2, "nested": {"a": [1, 2]}, "gpt-x": 9.9}
    merged = merge_ratio(table, IDENTITY, 3.0)

    assert merged is table
    assert merged["gpt-x"] == 3.0
    assert merged["gw-gpt-x"] == 3.0
    assert merged["other-model"] == 1.2
    assert merged["nested"] == {"a": [1, 2]}
    assert list(merged) == ["other-model", "nested", "gpt-x", "gw-gpt-x"]


def test_merge_same_alias_twice_writes_single_key():
    identity = ModelIdentity("same", "same", "https://x")
    table = merge_ratio({"a": 1}, identity, 2.0)
    assert table == {"a": 1, "same": 2.0}


def test_merge_fetched_never_synthesizes_absent_table():
    fetch = TableFetch(key="CompletionRatio", issue=ParseIssue("CompletionRatio", "missing", "x"))
    assert merge_fetched(fetch, IDENTITY, 3.0).table is None


def test_ratio_changes_reports_only_differences():
    before = {"a": 1, "gpt-x": 2.0}
    after = {"a": 1, "gpt-x": 3.0, "gw-gpt-x": 3.0}
    assert ratio_changes(before, after) == {"gpt-x": (2.0, 3.0), "gw-gpt-x": (None, 3.0)}
