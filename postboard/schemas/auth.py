"""Request schemas for auth endpoints and the resolved request identity."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from postboard.core.abilities import Ability


class RegisterRequest(BaseModel):
    """Self-service registration; always creates a 'user' account."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., min_length=6, description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class Identity(BaseModel):
    """
    Who is making the request, as resolved from the bearer token.

    abilities are the ones bound to the presented token, not the ones the
    user's current role would grant.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    token_id: int
    abilities: frozenset[Ability]

    def can(self, ability: Ability) -> bool:
        return ability in self.abilities
