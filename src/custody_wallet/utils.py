"""Unit conversion and address helpers for the custody wallet."""

from decimal import Decimal, localcontext

from web3 import Web3
from web3.types import ChecksumAddress

from .constants import WEI_PER_ETHER, WEI_PER_GWEI
from .exceptions import ValidationError


def _scale_down(amount: int, divisor: int) -> Decimal:
    if amount < 0:
        raise ValidationError("Amount cannot be negative", field="amount", value=amount)

    with localcontext() as ctx:
        ctx.prec = max(28, len(str(amount)) + 4)
        return Decimal(amount) / Decimal(divisor)


def wei_to_gwei(wei: int) -> Decimal:
    """Convert a wei amount to gwei."""
    return _scale_down(wei, WEI_PER_GWEI)


def wei_to_ether(wei: int) -> Decimal:
    """Convert a wei amount to ether."""
    return _scale_down(wei, WEI_PER_ETHER)


def format_decimal(value: Decimal) -> str:
    """Render a Decimal in plain notation without trailing zeros."""
    if value == 0:
        return "0"
    with localcontext() as ctx:
        ctx.prec = max(28, len(value.as_tuple().digits))
        return f"{value.normalize():f}"


def normalise_address(address: str | None) -> ChecksumAddress | None:
    """Return the checksum form of an EVM address, or None when it is not one."""
    if not address:
        return None
    try:
        return Web3.to_checksum_address(address)
    except (TypeError, ValueError):
        return None


def coerce_int(value: object, field: str) -> int:
    """Convert an int or hex/decimal string into an int."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"Invalid integer for {field}", field=field, value=value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 0)
        except ValueError:
            pass
    raise ValidationError(f"Invalid integer for {field}", field=field, value=value)
