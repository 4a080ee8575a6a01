"""
Authorization gate: ability checks and resource ownership checks.

Both checks raise Forbidden and otherwise return nothing, so a handler can
call them inline and carry on. Ability checks run before the handler body
(see require_ability in postboard.api.deps); ownership checks run after the
resource has been fetched, so a missing resource is reported as 404 first.
"""

from postboard.core.abilities import Ability
from postboard.core.errors import Forbidden
from postboard.schemas.auth import Identity


def authorize_ability(identity: Identity, required: Ability) -> None:
    """Raise Forbidden unless the token behind identity carries required."""
    if not identity.can(required):
        raise Forbidden()


def authorize_owner(
    identity: Identity,
    owner_id: int,
    message: str | None = None,
) -> None:
    """Raise Forbidden unless identity is the owner of the resource."""
    if identity.user_id != owner_id:
        raise Forbidden(message)
