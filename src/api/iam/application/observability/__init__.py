"""Domain-Oriented Observability for IAM application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from iam.application.observability.auth_service_probe import (
    AuthServiceProbe,
    DefaultAuthServiceProbe,
)
from iam.application.observability.authentication_probe import (
    AuthenticationProbe,
    DefaultAuthenticationProbe,
)
from iam.application.observability.group_service_probe import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)
from iam.application.observability.notifier_probe import (
    DefaultNotifierProbe,
    NotifierProbe,
)
from iam.application.observability.team_service_probe import (
    DefaultTeamServiceProbe,
    TeamServiceProbe,
)

__all__ = [
    "AuthServiceProbe",
    "AuthenticationProbe",
    "DefaultAuthServiceProbe",
    "DefaultAuthenticationProbe",
    "DefaultGroupServiceProbe",
    "DefaultNotifierProbe",
    "DefaultTeamServiceProbe",
    "GroupServiceProbe",
    "NotifierProbe",
    "TeamServiceProbe",
]
