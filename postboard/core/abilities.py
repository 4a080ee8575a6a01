"""
Roles and token abilities.

Abilities are bound to a personal access token when it is issued. The set a
token carries is decided once, from the user's role at that moment, and is
never re-derived afterwards: promoting or demoting a user does not change the
tokens they already hold.
"""

from enum import Enum


class Role(str, Enum):
    """Platform-wide user role."""

    USER = "user"
    ADMIN = "admin"


class Ability(str, Enum):
    """Closed vocabulary of abilities a token can carry."""

    # Posts
    VIEW_POSTS = "view-posts"
    CREATE_POSTS = "create-posts"
    UPDATE_POSTS = "update-posts"
    DELETE_POSTS = "delete-posts"

    # Users (admin)
    VIEW_USERS = "view-users"
    CREATE_USERS = "create-users"
    UPDATE_USERS = "update-users"
    DELETE_USERS = "delete-users"


POST_ABILITIES: frozenset[Ability] = frozenset(
    {
        Ability.VIEW_POSTS,
        Ability.CREATE_POSTS,
        Ability.UPDATE_POSTS,
        Ability.DELETE_POSTS,
    }
)

USER_ADMIN_ABILITIES: frozenset[Ability] = frozenset(
    {
        Ability.VIEW_USERS,
        Ability.CREATE_USERS,
        Ability.UPDATE_USERS,
        Ability.DELETE_USERS,
    }
)

ROLE_ABILITIES: dict[Role, frozenset[Ability]] = {
    Role.USER: POST_ABILITIES,
    Role.ADMIN: POST_ABILITIES | USER_ADMIN_ABILITIES,
}


def abilities_for_role(role: Role | str) -> frozenset[Ability]:
    """Default ability set granted at login for a role."""
    return ROLE_ABILITIES[Role(role)]


def parse_abilities(values: list[str]) -> frozenset[Ability]:
    """
    Convert stored ability strings back into the enum.

    Raises ValueError on a string outside the vocabulary.
    """
    return frozenset(Ability(v) for v in values)
