from pydantic import BaseModel


class Token(BaseModel):
    token: str


class TokenClaims(BaseModel):
    id: str
    email: str
    iat: int
    exp: int
