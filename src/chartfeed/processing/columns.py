"""Column-role detection for tables with arbitrary headers."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

# Role -> lowercase substrings; order within a tuple does not matter, the
# first matching column in header order wins.
ROLE_CANDIDATES: dict[str, tuple[str, ...]] = {
    "date": ("timestamp", "date", "time"),
    "open": ("open", "o"),
    "high": ("high", "h"),
    "low": ("low", "l"),
    "close": ("close", "c", "last"),
    "volume": ("volume", "vol", "v"),
}

REQUIRED_ROLES = ("date", "open", "high", "low", "close")


class ColumnMapping(BaseModel):
    """Assignment of semantic roles to column names. Empty string means unmapped."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    date: str = ""
    open: str = ""
    high: str = ""
    low: str = ""
    close: str = ""
    volume: str = ""

    def missing_roles(self) -> tuple[str, ...]:
        """Required roles that have no column assigned."""
        return tuple(role for role in REQUIRED_ROLES if not getattr(self, role))

    @property
    def is_complete(self) -> bool:
        return not self.missing_roles()

    def merged(self, **overrides: str) -> ColumnMapping:
        """Return a copy with the given roles replaced, e.g. ``merged(close="Adj Close")``."""
        unknown = set(overrides) - set(ROLE_CANDIDATES)
        if unknown:
            raise ValueError(f"Unknown role(s): {', '.join(sorted(unknown))}")
        return self.model_copy(update=overrides)


def _find_column(column_names: Sequence[str], candidates: tuple[str, ...]) -> str:
    for name in column_names:
        lowered = name.lower()
        if any(c in lowered for c in candidates):
            return name
    return ""


def auto_detect(column_names: Sequence[str]) -> ColumnMapping:
    """Propose a mapping by case-insensitive substring match on column names.

    Roles are matched independently, so one column may fill several roles
    (a header like "Close Time" matches both date and close).
    """
    return ColumnMapping(
        **{role: _find_column(column_names, cands) for role, cands in ROLE_CANDIDATES.items()}
    )
