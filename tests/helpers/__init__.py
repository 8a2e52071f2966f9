from .mocks import FailingSigner, HardwareUnavailable, RecordingSigner
from .parity import assert_hex_equal, hex_string_to_bytes

__all__ = [
    "RecordingSigner",
    "FailingSigner",
    "HardwareUnavailable",
    "assert_hex_equal",
    "hex_string_to_bytes",
]
