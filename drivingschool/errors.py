"""
Erreurs métier du portail.

Chaque erreur porte un message destiné à l'utilisateur et le code HTTP
renvoyé par l'API. Les gestionnaires FastAPI de `drivingschool.main`
convertissent toute `PortalError` en réponse JSON.
"""
from typing import List, Optional


class PortalError(Exception):
    """Erreur de base du portail"""

    status_code: int = 400
    default_message: str = "Une erreur est survenue"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(PortalError):
    status_code = 404
    default_message = "Ressource introuvable"


class DuplicateEmailError(PortalError):
    status_code = 409
    default_message = "Un utilisateur avec cet email existe déjà"


class DuplicateRegistrationError(PortalError):
    status_code = 409
    default_message = "Ce numéro d'immatriculation existe déjà"


class InvalidCredentialsError(PortalError):
    status_code = 401
    default_message = "Email ou mot de passe incorrect"


class InvalidPasswordError(PortalError):
    status_code = 400
    default_message = "Mot de passe actuel incorrect"


class AuthenticationRequired(PortalError):
    status_code = 401
    default_message = "Veuillez vous connecter"


class PermissionDenied(PortalError):
    status_code = 403
    default_message = "Accès non autorisé"


class InvalidLessonWindow(PortalError):
    status_code = 422
    default_message = "L'heure de fin doit être postérieure à l'heure de début"


class SchedulingConflictError(PortalError):
    """Conflit de réservation (moniteur, élève ou véhicule déjà réservé)"""

    status_code = 409
    default_message = "Conflit de réservation détecté"

    def __init__(self, conflicts: Optional[List[str]] = None, message: Optional[str] = None):
        self.conflicts = list(conflicts or [])
        if message is None and self.conflicts:
            message = "Conflit de réservation détecté:\n" + "\n".join(self.conflicts)
        super().__init__(message)


class BackendError(PortalError):
    """Échec d'une requête vers Supabase"""

    status_code = 502
    default_message = "Erreur de communication avec la base de données"
