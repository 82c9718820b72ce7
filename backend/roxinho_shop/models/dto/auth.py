from pydantic import BaseModel


class TokenUser(BaseModel):
    """Caller identity taken from a verified access token."""

    id: str
    email: str | None = None
    name: str | None = None
    is_admin: bool = False
