"""
Options controlling how strictly the decoder treats its input.
"""
from dataclasses import dataclass
from typing import Optional

DUPLICATE_KEY_POLICIES = ("last", "first", "error")

# Each level costs two interpreter frames; this stays well under the
# default recursion limit of 1000.
DEFAULT_MAX_DEPTH = 256

# Matches CPython's own cap on int/str conversions.
DEFAULT_MAX_INT_DIGITS = 4300


@dataclass(frozen=True)
class DecoderConfig:
    """
    max_depth: deepest allowed container nesting, None for no limit.
    duplicate_keys: what to do when a dictionary repeats a key.
    int_bits: reject integers outside a signed range of this width, None for unbounded.
    max_int_digits: longest integer accepted, leading zeros not counted, None for no limit.
    """
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    duplicate_keys: str = "last"
    int_bits: Optional[int] = None
    max_int_digits: Optional[int] = DEFAULT_MAX_INT_DIGITS

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.duplicate_keys not in DUPLICATE_KEY_POLICIES:
            raise ValueError(
                f"duplicate_keys must be one of {', '.join(DUPLICATE_KEY_POLICIES)}"
            )
        if self.int_bits is not None and self.int_bits < 2:
            raise ValueError("int_bits must be at least 2")
        if self.max_int_digits is not None and self.max_int_digits < 1:
            raise ValueError("max_int_digits must be at least 1")

    def int_in_range(self, value: int) -> bool:
        if self.int_bits is None:
            return True
        bound = 1 << (self.int_bits - 1)
        return -bound <= value < bound

    def int_digit_limit(self) -> Optional[int]:
        """Most significant digits an integer may have before it is rejected."""
        limits = [self.max_int_digits]
        if self.int_bits is not None:
            # digits in 2 ** (int_bits - 1), rounded up
            limits.append((self.int_bits - 1) * 30103 // 100000 + 1)
        limits = [n for n in limits if n is not None]
        return min(limits) if limits else None


DEFAULT_CONFIG = DecoderConfig()
