from datetime import datetime, timedelta, timezone

import jwt

from chatline.config.settings import Config
from chatline.domain.value_objects.chat_participant import ChatParticipant


def generate_jwt_token(
    participant: ChatParticipant,
    secret: str,
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    """Generate a JWT the way the host application issues them."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": participant.id.value,
        "name": participant.name,
        "email": participant.email,
        "iat": now,
        "exp": now + expires_in,
        "iss": Config.SERVICE_AUTH_ISSUER,
        "aud": Config.SERVICE_AUTH_AUDIENCE,
    }
    return jwt.encode(payload, secret, algorithm="HS256")
