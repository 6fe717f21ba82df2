"""
Contract errors.

These are raised, never returned: they signal a platform-integration or
programming mistake (unknown alteration hook, illegal state transition,
unpriceable species), not bad end-user input. Validation problems travel in
ValidationResult.error instead.
"""

from __future__ import annotations

from typing import Any


class DinosureError(Exception):
    """Base class for all Dinosure contract errors."""


class UnknownAlterationHookError(DinosureError, ValueError):
    def __init__(self, alteration_hook_key: Any) -> None:
        self.alteration_hook_key = alteration_hook_key
        super().__init__(f'Invalid alteration hook key "{alteration_hook_key}"')


class ReactivationNotAllowedError(DinosureError):
    def __init__(self, status: Any) -> None:
        self.status = status
        super().__init__(
            f'Policy with status "{status}" cannot be reactivated. '
            "Only cancelled or lapsed policies can be reactivated."
        )


class UnknownSpeciesError(DinosureError, KeyError):
    def __init__(self, species: Any) -> None:
        self.species = species
        super().__init__(f'No premium multiplier configured for species "{species}"')

    def __str__(self) -> str:
        return str(self.args[0])
