import secrets
import string

TEMPORARY_PASSWORD_LENGTH = 12
CHARSET = string.ascii_letters + string.digits + "!@#$%^&*"

def generate_temporary_password(length: int = TEMPORARY_PASSWORD_LENGTH) -> str:
    """Mot de passe temporaire remis au nouvel élève ou moniteur"""
    return "".join(secrets.choice(CHARSET) for _ in range(length))
