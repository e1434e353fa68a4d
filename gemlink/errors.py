"""Error taxonomy for the gem engine.

Only template registration and loadout decoding raise. Everything a combat
or UI layer calls reports failure through a result object instead, so a
skill button can be disabled rather than crash the frame.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Categories of failure surfaced by engine operations."""
    CONFIGURATION = "configuration_error"              # Bad template registration
    LOOKUP_MISS = "lookup_miss"                        # Unknown template id
    INVALID_SOCKET_OPERATION = "invalid_socket_operation"
    INELIGIBLE_SKILL_USE = "ineligible_skill_use"
    INVALID_VALUE = "invalid_value"                    # Rejected mutator input


class GemlinkError(Exception):
    """Base class for raised gem engine errors."""


class ConfigurationError(GemlinkError):
    """Invalid or duplicate gem template registration."""


class LoadoutError(GemlinkError):
    """Malformed loadout document."""


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a mutation that may be rejected.

    Truthy on success. On failure the target is left untouched.
    """
    success: bool
    error: Optional[ErrorKind] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls) -> "OperationResult":
        return cls(success=True)

    @classmethod
    def fail(cls, error: ErrorKind, message: str) -> "OperationResult":
        return cls(success=False, error=error, message=message)
