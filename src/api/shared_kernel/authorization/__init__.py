"""Authorization primitives shared across bounded contexts."""

from shared_kernel.authorization.types import Action

__all__ = [
    "Action",
]
