"""Input validation utilities."""
from typing import Any

from asset_converter.utils.errors import ValidationError


VALID_MODES = ("short", "long")


def validate_amount(amount: Any) -> float:
    """
    Validate conversion amount.

    Args:
        amount: Amount to validate (number or numeric string)

    Returns:
        Validated amount as float

    Raises:
        ValidationError: If amount is missing, not numeric or not positive
    """
    if amount is None or amount == "":
        raise ValidationError("Amount is required")

    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise ValidationError(f"Amount must be a number, got: {amount!r}")

    if value != value or value in (float("inf"), float("-inf")):
        raise ValidationError(f"Amount must be finite, got: {amount}")

    if value <= 0:
        raise ValidationError(f"Amount must be positive, got: {amount}")

    return value


def validate_asset(asset: Any) -> str:
    """Validate the source asset identifier (symbol or vehicle model name)."""
    if not isinstance(asset, str) or not asset.strip():
        raise ValidationError("Asset parameter required")
    return asset.strip()


def validate_mode(mode: str) -> str:
    """Validate horizon mode."""
    mode = (mode or "short").lower().strip()

    if mode not in VALID_MODES:
        raise ValidationError(
            f"Invalid mode: {mode}. Must be one of {list(VALID_MODES)}"
        )

    return mode
