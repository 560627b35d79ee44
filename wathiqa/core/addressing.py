"""
Filing address model.

An archive address names a physical slot: a block (cabinet), a row inside
it and a column inside the row. Its canonical string form is
``{block}.{row}.{column}``, e.g. ``A.1.12``.

Validation is strict and never normalizes: ``"a"`` is not ``"A"`` and
``"01"`` is not ``"1"``. Callers upper-case or trim before encoding.

Dependencies: re (stdlib)
System role: Pure validation and encode/decode of filing addresses
"""

import re
import string
from typing import Any, NamedTuple

from wathiqa.core.exceptions import InvalidFormatError

SEPARATOR = "."

BLOCK_LABEL_PATTERN = re.compile(r"[A-Z]{1,3}")
NUMERAL_LABEL_PATTERN = re.compile(r"[0-9]{1,3}")

FIXED_BLOCKS: tuple[str, ...] = tuple(string.ascii_uppercase)


class Address(NamedTuple):
    """Validated (block, row, column) triple."""

    block: str
    row: str
    column: str

    @property
    def reference(self) -> str:
        """Canonical string form."""
        return SEPARATOR.join(self)

    def __str__(self) -> str:
        return self.reference


def _check(pattern: re.Pattern, value: Any, field: str, rule: str) -> str:
    if not isinstance(value, str) or pattern.fullmatch(value) is None:
        raise InvalidFormatError(f"{field} must be {rule}", field=field, value=value)
    return value


def validate_block_label(label: Any) -> str:
    """
    Validate a block label.

    Args:
        label: Candidate label

    Returns:
        str: The label, unchanged

    Raises:
        InvalidFormatError: Unless label is 1-3 uppercase ASCII letters
    """
    return _check(BLOCK_LABEL_PATTERN, label, "block", "1-3 uppercase letters A-Z")


def validate_numeral_label(label: Any, field: str = "row") -> str:
    """
    Validate a row or column numeral.

    Args:
        label: Candidate numeral string
        field: Component name reported on failure ("row" or "column")

    Returns:
        str: The numeral, unchanged

    Raises:
        InvalidFormatError: Unless label is 1-3 ASCII digits
    """
    return _check(NUMERAL_LABEL_PATTERN, label, field, "1-3 digits 0-9")


def make_address(block: Any, row: Any, column: Any) -> Address:
    """Validate all three components and build an Address."""
    return Address(
        validate_block_label(block),
        validate_numeral_label(row, "row"),
        validate_numeral_label(column, "column"),
    )


def encode(block: Any, row: Any, column: Any) -> str:
    """
    Encode components into the canonical reference string.

    Raises:
        InvalidFormatError: If any component fails its validator
    """
    return make_address(block, row, column).reference


def decode(reference: Any) -> Address:
    """
    Decode a canonical reference string.

    Args:
        reference: String such as ``"B.3.14"``

    Returns:
        Address: Parsed and validated address

    Raises:
        InvalidFormatError: Unless the string has exactly three valid parts
    """
    if not isinstance(reference, str):
        raise InvalidFormatError("reference must be a string", field="reference", value=reference)
    parts = reference.split(SEPARATOR)
    if len(parts) != 3 or not all(parts):
        raise InvalidFormatError(
            "reference must have exactly three non-empty parts",
            field="reference",
            value=reference,
        )
    return make_address(*parts)


def is_fixed_block(label: str) -> bool:
    """True for the 26 single-letter blocks."""
    return label in FIXED_BLOCKS


def attachment_key(address: Address, filename: str) -> str:
    """Object-store key for a file attached at ``address``."""
    return f"{address.block}/{address.reference}/{filename}"
