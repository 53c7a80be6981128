"""
SubmittedIndex Value Object.

An index accepted for computation. Every accepted submission becomes one
immutable row in the durable store; re-submitting the same index appends
another row.

This is an immutable Value Object following DDD principles.
"""

import re
from dataclasses import dataclass
from typing import Any, Final

from fibcalc.domain.fibonacci.constants import DEFAULT_MAX_INDEX, MIN_INDEX
from fibcalc.domain.shared.exceptions import ValidationError

# Decimal digits with optional surrounding whitespace ("5", " 12 ")
INDEX_PATTERN: Final[re.Pattern] = re.compile(r"^\s*(\d+)\s*$")


@dataclass(frozen=True)
class SubmittedIndex:
    """
    Immutable Value Object for an accepted index.

    Validity depends on the configured maximum, so the bound is checked in
    parse(); the dataclass itself only enforces a non-negative integer.

    Attributes:
        value: Non-negative integer index

    Examples:
        >>> SubmittedIndex.parse("5", max_index=40).value
        5
        >>> SubmittedIndex.parse(41, max_index=40)  # raises ValidationError
    """

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True must not pass as index 1
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Index must be an integer, got {type(self.value).__name__}",
                original_value=self.value,
            )
        if self.value < MIN_INDEX:
            raise ValidationError(
                f"Index must be non-negative, got {self.value}",
                original_value=self.value,
            )

    @classmethod
    def parse(cls, raw: Any, max_index: int = DEFAULT_MAX_INDEX) -> "SubmittedIndex":
        """
        Validate raw client input and build a SubmittedIndex.

        Accepted input:
            - int (not bool) in [0, max_index]
            - str of decimal digits, surrounding whitespace allowed
            - float with no fractional part (JSON clients sending 5.0)

        Args:
            raw: Value received from the client
            max_index: Largest accepted index

        Returns:
            SubmittedIndex

        Raises:
            ValidationError: Missing, non-numeric, negative or above max_index

        Examples:
            >>> SubmittedIndex.parse(" 7 ").value
            7
        """
        if raw is None:
            raise ValidationError("Index is required", original_value=raw)

        if isinstance(raw, bool):
            raise ValidationError("Index must be an integer, got bool", original_value=raw)

        if isinstance(raw, int):
            value = raw
        elif isinstance(raw, float):
            if not raw.is_integer():
                raise ValidationError(
                    f"Index must be an integer, got {raw}", original_value=raw
                )
            value = int(raw)
        elif isinstance(raw, str):
            if raw.strip() == "":
                raise ValidationError("Index is required", original_value=raw)
            if raw.strip().startswith("-") and raw.strip()[1:].isdigit():
                raise ValidationError(
                    f"Index must be non-negative, got {raw.strip()}", original_value=raw
                )
            match = INDEX_PATTERN.match(raw)
            if not match:
                raise ValidationError(
                    f"Index must be an integer, got {raw!r}", original_value=raw
                )
            digits = match.group(1).lstrip("0") or "0"
            # int() refuses very long digit strings; anything longer than max is too high
            if len(digits) > len(str(max_index)):
                raise ValidationError(
                    f"Index too high: {len(digits)}-digit value (max {max_index})",
                    original_value=raw,
                )
            value = int(digits)
        else:
            raise ValidationError(
                f"Index must be an integer, got {type(raw).__name__}",
                original_value=raw,
            )

        index = cls(value)

        if index.value > max_index:
            raise ValidationError(
                f"Index too high: {index.value} (max {max_index})", original_value=raw
            )

        return index

    def to_key(self) -> str:
        """
        Cache key / message payload for this index.

        Examples:
            >>> SubmittedIndex(5).to_key()
            '5'
        """
        return str(self.value)
