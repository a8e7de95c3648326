"""Internal structural helpers shared across modules."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, TypeVar


@dataclass
class ConfigBase:
    """Small helper base for config-style dataclasses."""

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise ``ValueError`` when a field holds an unusable value."""

    def with_updates(self: "T", **updates: Any) -> "T":
        """Return a validated copy with updated fields."""
        return replace(self, **updates)

    def as_dict(self) -> dict[str, Any]:
        """Serialize dataclass fields as a plain dictionary."""
        return asdict(self)


T = TypeVar("T", bound=ConfigBase)
