"""
Authentication Dependency for FastAPI.

- Validates an HS256 bearer JWT issued by the host application
- Turns the claims into a ChatParticipant (``sub`` is the user id; ``name``,
  ``email`` and ``avatar`` are optional profile claims)
- Records the profile in the user directory so display names resolve

Config needed (from chatline.config.settings):
- SERVICE_AUTH_SECRET
- SERVICE_AUTH_ISSUER
- SERVICE_AUTH_AUDIENCE
"""

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from chatline.config.settings import Config
from chatline.domain.ports.repositories import UserRepository
from chatline.domain.value_objects.chat_participant import ChatParticipant
from chatline.domain.value_objects.user_id import UserId

security = HTTPBearer()


def decode_token(token: str) -> ChatParticipant:
    """
    Validate a token and build the acting participant.

    Raises:
        HTTPException 401 if token is invalid, expired, or missing required claims
    """
    try:
        claims = jwt.decode(
            token,
            Config.SERVICE_AUTH_SECRET,
            algorithms=["HS256"],
            audience=Config.SERVICE_AUTH_AUDIENCE,
            issuer=Config.SERVICE_AUTH_ISSUER,
            options={"require": ["exp", "iat", "aud", "iss", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {str(e)}",
        )

    try:
        user_id = UserId(str(claims["sub"]))
    except (KeyError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid subject claim in token",
        )

    return ChatParticipant(
        id=user_id,
        name=claims.get("name"),
        email=claims.get("email"),
        avatar=claims.get("avatar"),
    )


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> ChatParticipant:
    """Extract the participant from the bearer token and refresh their profile."""
    participant = decode_token(credentials.credentials)
    users = await request.state.dishka_container.get(UserRepository)
    await users.save(participant)
    return participant
