"""
Sessions utilisateur.

Une session est créée à la connexion et conservée en mémoire dans le
processus : pas de rafraîchissement, elle disparaît au redémarrage ou à la
déconnexion. Le jeton opaque est transmis par cookie ou par l'en-tête
`Authorization: Bearer`.
"""
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional

from drivingschool.schemas.user import Role, UserPublic

@dataclass
class Session:
    token: str
    user: UserPublic
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def role(self) -> Role:
        return self.user.role

class SessionStore:
    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def open(self, user: UserPublic) -> Session:
        session = Session(token=secrets.token_urlsafe(32), user=user)
        with self._lock:
            self._sessions[session.token] = session
        return session

    def get(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        with self._lock:
            return self._sessions.get(token)

    def update_user(self, token: str, user: UserPublic) -> None:
        with self._lock:
            if token in self._sessions:
                self._sessions[token].user = user

    def close(self, token: Optional[str]) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
