"""Input source handling and resolution."""
from colcheck.input.resolver import (
    InputResolutionError,
    InputType,
    resolve_inputs,
)

__all__ = [
    'InputType',
    'InputResolutionError',
    'resolve_inputs',
]
