"""
Naming grammar for experiments and alternatives.

Names start with a lowercase letter or digit, followed by any number of
lowercase letters, digits, hyphens, underscores or spaces.
"""

import re
from typing import Iterable, List, Optional

from sixpack_client.core.exceptions import ValidationError

NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9\-_ ]*$")


def is_valid_name(value: Optional[str]) -> bool:
    """Return True if ``value`` matches the naming grammar."""
    if not isinstance(value, str):
        return False
    return NAME_PATTERN.fullmatch(value) is not None


def validate_experiment_name(name: str) -> str:
    if not is_valid_name(name):
        raise ValidationError(f"Bad experiment name: {name!r}")
    return name


def validate_alternatives(alternatives: Iterable[str]) -> List[str]:
    """
    Validate an ordered set of alternatives.

    Returns:
        The alternatives as a list, order preserved

    Raises:
        ValidationError: fewer than 2 entries, a duplicate, or a bad name
    """
    alternatives = list(alternatives)
    if len(alternatives) < 2:
        raise ValidationError("Must specify at least 2 alternatives")

    for alternative in alternatives:
        if not is_valid_name(alternative):
            raise ValidationError(f"Bad alternative name: {alternative!r}")

    if len(set(alternatives)) != len(alternatives):
        raise ValidationError("Alternative names must be unique")

    return alternatives


def validate_force(force: str) -> str:
    if not is_valid_name(force):
        raise ValidationError(f"Bad force alternative name: {force!r}")
    return force


def validate_traffic_fraction(fraction: float) -> float:
    try:
        fraction = float(fraction)
    except (TypeError, ValueError):
        raise ValidationError(f"Traffic fraction must be a number, got {fraction!r}")
    if not 0 <= fraction <= 1:
        raise ValidationError(f"Traffic fraction must be between 0 and 1, got {fraction}")
    return fraction
