"""
SnippetBoard Backend — Author Model
=====================================

What:  An author who can post snippets.
How:   Frozen dataclass. Identity is the `id` alone: two Author values with
       the same id and different names compare (and hash) equal.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Author:
    """
    Attributes:
        id:   Opaque, stable identifier (unique within the directory)
        name: Display name, not part of identity
    """

    id: str
    name: str = field(default="", compare=False)

    @property
    def uri(self) -> str:
        """Canonical profile path of this author's feed."""
        return f"/authors/{self.id}"

    def is_same(self, other: "Author") -> bool:
        return self.id == other.id
