import pytest

from seva_portal.services.words import amount_to_words, format_inr, number_to_words

@pytest.mark.parametrize("amount, expected", [
    (0, "Zero Only"),
    (1000, "One Thousand Only"),
    (1234, "One Thousand Two Hundred Thirty Four Only"),
    (15, "Fifteen Only"),
    (100, "One Hundred Only"),
    (999999, "Nine Hundred Ninety Nine Thousand Nine Hundred Ninety Nine Only"),
    (2500.0, "Two Thousand Five Hundred Only"),
])
def test_amount_to_words(amount, expected):
    assert amount_to_words(amount) == expected

def test_number_to_words_without_suffix():
    assert number_to_words(40010) == "Forty Thousand Ten"

@pytest.mark.parametrize("bad", [-1, 1_000_000, 12.5, True])
def test_amount_to_words_rejects(bad):
    with pytest.raises(ValueError):
        amount_to_words(bad)

@pytest.mark.parametrize("amount, expected", [
    (0, "0.00"),
    (999, "999.00"),
    (1000, "1,000.00"),
    (123456, "1,23,456.00"),
    (1234567.5, "12,34,567.50"),
])
def test_format_inr(amount, expected):
    assert format_inr(amount) == expected

@pytest.mark.parametrize("bad", [float("inf"), float("-inf"), float("nan")])
def test_amount_to_words_rejects_non_finite(bad):
    with pytest.raises(ValueError):
        amount_to_words(bad)
