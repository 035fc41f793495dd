from pydantic import BaseModel


class Principal(BaseModel):
    """Identity accepted by the authorization hook."""

    subject: str
    jti: str | None = None
    token_type: str = "access"
