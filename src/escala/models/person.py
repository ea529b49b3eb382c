"""Person model for roster members."""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Person:
    """A volunteer eligible for assignment. The id never changes."""

    id: str
    name: str
    owner_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "name", str(self.name).strip())

    @classmethod
    def new(cls, name: str, owner_id: Optional[str] = None) -> "Person":
        """Create a person with a freshly generated id."""
        name = str(name).strip()
        if not name:
            raise ValueError("Person name must not be empty")
        return cls(id=str(uuid.uuid4()), name=name, owner_id=owner_id)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "owner_id": self.owner_id,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Person":
        """Create from dictionary."""
        return cls(
            id=str(d["id"]),
            name=str(d.get("name", "")),
            owner_id=d.get("owner_id") or None,
        )
