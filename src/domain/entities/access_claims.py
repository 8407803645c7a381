"""
AccessClaims

Decoded claim set of an access token. Never persisted.
"""

from pydantic import BaseModel, StrictInt, StrictStr


class AccessClaims(BaseModel):
    sub: StrictStr
    iat: StrictInt
    exp: StrictInt
