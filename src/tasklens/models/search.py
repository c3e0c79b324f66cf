"""Search result models."""

from pydantic import BaseModel, ConfigDict, Field

from .task import Task


class FieldMatch(BaseModel):
    """Matched field of a task.

    Attributes:
        key: Field name ("name" or "description")
        value: Full text of the field
        indices: Inclusive ``(start, end)`` character spans that matched
    """

    model_config = ConfigDict(frozen=True)

    key: str
    value: str
    indices: list[tuple[int, int]] = Field(default_factory=list)


class SearchResult(BaseModel):
    """A task ranked against a query. Lower score is a better match."""

    model_config = ConfigDict(frozen=True)

    task: Task
    matches: list[FieldMatch] = Field(default_factory=list)
    score: float = Field(ge=0.0, le=1.0)

    def match_for(self, key: str) -> FieldMatch | None:
        """Return the match for *key*, if that field matched."""
        for match in self.matches:
            if match.key == key:
                return match
        return None


class HighlightSegment(BaseModel):
    """Run of text that is either highlighted or not."""

    model_config = ConfigDict(frozen=True)

    text: str
    highlighted: bool = False
