import pytest

from gateway_onboard.errors import DomainError
from gateway_onboard.validation import validate_inputs


def test_valid_inputs_build_domain_objects():
    identity, quote = validate_inputs(
        " https://api.example.com ", "sk", " gpt-x ", "gw-gpt-x", "2.0", 6
    )
    assert identity.source_name == "gpt-x"
    assert identity.source_base_url == "https://api.example.com"
    assert quote.input_price_per_million == 2.0
    assert quote.output_price_per_million == 6.0


def test_every_problem_is_reported_at_once():
    with pytest.raises(DomainError) as excinfo:
        validate_inputs("ftp://host", "", "", " ", "abc", -1)

    msg = str(excinfo.value)
    assert "http:// or https://" in msg
    assert "source token" in msg
    assert "source model name" in msg
    assert "gateway model name" in msg
    assert "input price must be a number" in msg
    assert "output price must not be negative" in msg


def test_zero_input_price_is_rejected():
    with pytest.raises(DomainError, match="greater than zero"):
        validate_inputs("https://x", "sk", "a", "b", 0, 1)


def test_zero_output_price_is_allowed():
    _, quote = validate_inputs("https://x", "sk", "a", "b", 1, 0)
    assert quote.output_price_per_million == 0.0


@pytest.mark.parametrize("price", [None, "", float("inf"), float("nan"), True])
def test_bad_input_price_values(price):
    with pytest.raises(DomainError):
        validate_inputs("https://x", "sk", "a", "b", price, 1)
