"""Team aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import TeamId


@dataclass
class Team:
    """A team users can join at signup.

    Teams are the numbering scope for ideas and bound who can be added as
    an idea collaborator. Membership is stored on the user, so the team
    itself only carries its name.
    """

    id: TeamId
    name: str

    @classmethod
    def create(cls, name: str) -> Team:
        """Create a team.

        Raises:
            ValueError: If name is empty or longer than 255 characters
        """
        name = name.strip()
        if not name or len(name) > 255:
            raise ValueError("Team name must be between 1 and 255 characters")
        return cls(id=TeamId.generate(), name=name)
