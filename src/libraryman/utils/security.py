"""
Signed tokens for newsletter unsubscribe links.

A token is the subscriber's email signed with the application secret and a
timestamp, so unsubscribe links cannot be forged for another address and
stop working after ``newsletter_token_max_age_seconds``.
"""

from itsdangerous import BadSignature, URLSafeTimedSerializer

from libraryman.config import get_settings

NEWSLETTER_SALT = "libraryman-newsletter-unsubscribe"


def create_serializer() -> URLSafeTimedSerializer:
    """
    Create a URLSafeTimedSerializer with the application secret key.

    Returns:
        URLSafeTimedSerializer: Configured serializer for signing/verifying data
    """
    settings = get_settings()
    return URLSafeTimedSerializer(settings.secret_key, salt=NEWSLETTER_SALT)


def create_unsubscribe_token(email: str) -> str:
    """
    Sign an email address for use in an unsubscribe link.

    Args:
        email: Subscriber address

    Returns:
        str: URL-safe signed token
    """
    return create_serializer().dumps({"email": email.lower()})


def read_unsubscribe_token(token: str, max_age: int | None = None) -> str | None:
    """
    Recover the email address from an unsubscribe token.

    Args:
        token: Token from create_unsubscribe_token()
        max_age: Maximum token age in seconds (defaults to settings)

    Returns:
        str | None: Email address, or None if the token is forged or expired
    """
    if max_age is None:
        max_age = get_settings().newsletter_token_max_age_seconds

    try:
        data = create_serializer().loads(token, max_age=max_age)
    except BadSignature:
        return None

    email = data.get("email") if isinstance(data, dict) else None
    return email if isinstance(email, str) else None
