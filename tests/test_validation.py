"""Tests for the experiment/alternative naming grammar."""

import pytest

from sixpack_client.core.exceptions import ValidationError
from sixpack_client.validation import (
    is_valid_name,
    validate_alternatives,
    validate_experiment_name,
    validate_force,
    validate_traffic_fraction,
)


class TestIsValidName:
    @pytest.mark.parametrize("name", [
        "a",
        "0",
        "my-test",
        "test_package",
        "button color",
        "9lives",
        "a-_ b",
    ])
    def test_accepts_grammar(self, name):
        assert is_valid_name(name)

    @pytest.mark.parametrize("name", [
        "",
        "Test",
        "-test",
        "_test",
        " test",
        "myTest",
        "test!",
        "test.name",
        "test\n",
        None,
        42,
    ])
    def test_rejects_everything_else(self, name):
        assert not is_valid_name(name)


class TestValidators:
    def test_bad_experiment_name(self):
        with pytest.raises(ValidationError, match="Bad experiment name"):
            validate_experiment_name("Bad Name")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_experiment_name("")

    def test_alternatives_order_preserved(self):
        assert validate_alternatives(("b", "a", "c")) == ["b", "a", "c"]

    def test_needs_at_least_two_alternatives(self):
        with pytest.raises(ValidationError, match="at least 2"):
            validate_alternatives(["only"])

    def test_bad_alternative_name(self):
        with pytest.raises(ValidationError, match="Bad alternative name"):
            validate_alternatives(["ok", "Not-OK"])

    def test_alternatives_must_be_unique(self):
        with pytest.raises(ValidationError, match="unique"):
            validate_alternatives(["a", "a"])

    def test_bad_force(self):
        with pytest.raises(ValidationError, match="force"):
            validate_force("B")

    @pytest.mark.parametrize("fraction", [0, 0.5, 1, "0.25"])
    def test_traffic_fraction_in_range(self, fraction):
        assert 0 <= validate_traffic_fraction(fraction) <= 1

    @pytest.mark.parametrize("fraction", [-0.1, 1.01, float("nan"), "lots", None])
    def test_traffic_fraction_out_of_range(self, fraction):
        with pytest.raises(ValidationError):
            validate_traffic_fraction(fraction)
