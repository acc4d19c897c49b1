"""
Errors raised by the simulator.

Two families:
- ConfigurationError: bad input, always reported before any game runs.
- InvariantViolation: an internal-consistency failure during play. These
  are never caught by the engine; they mean a strategy or the protocol
  implementation is broken.
"""

from __future__ import annotations


class BarterError(Exception):
    """Base class for simulator errors."""


class ConfigurationError(BarterError):
    """Raised when rules, simulation config or a roster are invalid."""

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        if len(self.errors) == 1:
            message = self.errors[0]
        else:
            message = f"Configuration invalid with {len(self.errors)} error(s): " + "; ".join(self.errors)
        super().__init__(message)


class StrategyConfigError(ConfigurationError):
    """Raised when a strategy rejects its configuration payload."""


class InvariantViolation(BarterError):
    """A game invariant was broken. Fatal."""


class SettlementError(InvariantViolation):
    """An accepted trade could not be fulfilled by one of its sides."""


class ProtocolError(InvariantViolation):
    """A strategy or the engine broke the proposal/acceptance protocol."""
