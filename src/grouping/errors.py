"""
Exception types raised by the grouping engine.

Only malformed descriptors and unknown catalog names are fatal. Bad dates,
unknown aggregate kinds and non-numeric values degrade in place and never
surface here.
"""
from __future__ import annotations


class GroupingError(Exception):
    """Base class for every error the engine raises."""


class SpecError(GroupingError, ValueError):
    """A grouping or series descriptor is malformed.

    ``errors`` holds every problem found, so callers (the API in
    particular) can report them all at once.
    """

    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: list[str] = list(errors)
        super().__init__("; ".join(self.errors))


class DefinitionNotFound(GroupingError, KeyError):
    """No drilldown definition with the requested name exists."""

    def __init__(self, name: str, known: list[str] | None = None):
        self.name = name
        self.known = known or []
        super().__init__(name)

    def __str__(self) -> str:
        if self.known:
            return f"Unknown drilldown '{self.name}'. Known: {', '.join(self.known)}"
        return f"Unknown drilldown '{self.name}'."
