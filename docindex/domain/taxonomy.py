"""Document taxonomy: the closed topic/project/team enumerations.

A Taxonomy is pure configuration (no I/O). The categorizer embeds it in
the prompt and, under the strict validation policy, uses it to coerce
model output back into the enumerations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class CategorizationResult:
    """Topic, project and team assigned to one document.

    Values are typed text, not guaranteed taxonomy members: under the
    permissive policy they are whatever the model returned.
    """

    topic: str
    project: str
    team: str

    def to_dict(self) -> dict[str, str]:
        return {"topic": self.topic, "project": self.project, "team": self.team}


DEFAULT_CATEGORIZATION = CategorizationResult(
    topic="Uncategorized",
    project="N/A",
    team="Operations",
)

DEFAULT_TOPICS: tuple[str, ...] = (
    "Quarterly Review",
    "New Product Launch",
    "Client Case Study",
    "Branding Guidelines",
    "Internal Operations",
    "Budget & Finance",
    "Uncategorized",
)

DEFAULT_PROJECTS: tuple[str, ...] = (
    "Q4 Strategy 2024",
    "Website Relaunch",
    "Client XYZ Campaign",
    "Internal Audit",
    "Brand Book Update",
    "N/A",
)

DEFAULT_TEAMS: tuple[str, ...] = (
    "Creative",
    "Sales",
    "Data & Analytics",
    "Product Marketing",
    "Executive",
    "Operations",
    "External",
)


class ValidationPolicy(str, Enum):
    """How parsed model output is checked against the taxonomy.

    PERMISSIVE returns whatever strings the model produced (the model is
    told to stay in the lists but may improvise). STRICT replaces any
    value outside its list with that field's fallback.
    """

    PERMISSIVE = "permissive"
    STRICT = "strict"


@dataclass(frozen=True)
class Taxonomy:
    """Ordered topic/project/team lists plus one fallback value per field."""

    topics: tuple[str, ...] = DEFAULT_TOPICS
    projects: tuple[str, ...] = DEFAULT_PROJECTS
    teams: tuple[str, ...] = DEFAULT_TEAMS
    topic_fallback: str = "Uncategorized"
    project_fallback: str = "N/A"
    team_fallback: str = "Operations"

    def __post_init__(self) -> None:
        # Accept lists from settings; keep the stored value hashable and immutable.
        for name in ("topics", "projects", "teams"):
            values = tuple(getattr(self, name))
            if not values:
                raise ValueError(f"Taxonomy {name} must not be empty")
            object.__setattr__(self, name, values)
        for values, fallback, field in (
            (self.topics, self.topic_fallback, "topic"),
            (self.projects, self.project_fallback, "project"),
            (self.teams, self.team_fallback, "team"),
        ):
            if fallback not in values:
                raise ValueError(
                    f"{field} fallback {fallback!r} is not one of the configured {field} values"
                )

    def default_result(self) -> CategorizationResult:
        """Return the fallback triple for this taxonomy."""
        return CategorizationResult(
            topic=self.topic_fallback,
            project=self.project_fallback,
            team=self.team_fallback,
        )

    def contains(self, result: CategorizationResult) -> bool:
        """Return True if every field of result is a member of its list."""
        return (
            result.topic in self.topics
            and result.project in self.projects
            and result.team in self.teams
        )

    def coerce(self, result: CategorizationResult) -> CategorizationResult:
        """Map out-of-taxonomy fields to their fallback; returns a new result."""
        if self.contains(result):
            return result
        return CategorizationResult(
            topic=result.topic if result.topic in self.topics else self.topic_fallback,
            project=(
                result.project if result.project in self.projects else self.project_fallback
            ),
            team=result.team if result.team in self.teams else self.team_fallback,
        )
