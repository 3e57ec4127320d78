"""Comptes utilisateurs : authentification, inscription, profil, mot de passe."""
import logging
from typing import Any, Dict, Optional, Tuple

from drivingschool.core.passwords import generate_temporary_password
from drivingschool.db.supabase import SupabaseClient, UNIQUE_VIOLATION
from drivingschool.errors import (
    BackendError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidPasswordError,
    NotFoundError,
)
from drivingschool.schemas.user import Role, UserPublic

logger = logging.getLogger(__name__)

USERS = "users"
PUBLIC_COLUMNS = "id, name, email, role"

def normalize_email(email: str) -> str:
    return email.strip().lower()

async def get_user(db: SupabaseClient, user_id: str, role: Optional[Role] = None) -> Dict[str, Any]:
    query = db.table(USERS).select("*").eq("id", user_id)
    if role is not None:
        query = query.eq("role", role.value)
    row = await db.fetch_one(query, "récupération utilisateur")
    if not row:
        raise NotFoundError("Utilisateur non trouvé")
    return row

async def email_exists(db: SupabaseClient, email: str, exclude_id: Optional[str] = None) -> bool:
    query = db.table(USERS).select("id").eq("email", normalize_email(email))
    if exclude_id:
        query = query.neq("id", exclude_id)
    row = await db.fetch_one(
        query,
        "vérification email",
        message="Erreur lors de la vérification de l'email"
    )
    return row is not None

async def authenticate(db: SupabaseClient, email: str, password: str) -> UserPublic:
    """Vérifier email et mot de passe et renvoyer l'utilisateur"""
    row = await db.fetch_one(
        db.table(USERS)
        .select(PUBLIC_COLUMNS)
        .eq("email", normalize_email(email))
        .eq("password", password),
        "connexion",
        message="Une erreur est survenue lors de la connexion"
    )
    if not row:
        raise InvalidCredentialsError()
    return UserPublic(**row)

async def create_account(
    db: SupabaseClient,
    fields: Dict[str, Any],
    role: Role,
    password: Optional[str] = None
) -> Tuple[Dict[str, Any], str]:
    """
    Créer un compte après contrôle de l'unicité de l'email

    Sans mot de passe fourni, un mot de passe temporaire est généré et
    renvoyé avec la ligne créée.
    """
    email = normalize_email(fields["email"])
    if await email_exists(db, email):
        raise DuplicateEmailError()

    password = password or generate_temporary_password()
    record = {**fields, "email": email, "password": password, "role": role.value}

    response = await db.execute(
        db.table(USERS).insert(record),
        f"création utilisateur ({role.value})",
        errors={UNIQUE_VIOLATION: DuplicateEmailError()},
        message="Erreur lors de la création du compte"
    )
    if not response.data:
        raise BackendError("Erreur lors de la création du compte")

    logger.info(f"Compte {role.value} créé: {response.data[0]['id']}")
    return response.data[0], password

async def register(db: SupabaseClient, name: str, email: str, password: str) -> UserPublic:
    """Inscription publique : toujours un compte élève"""
    row, _ = await create_account(db, {"name": name.strip(), "email": email}, Role.STUDENT, password=password)
    return UserPublic(id=row["id"], name=row["name"], email=row["email"], role=row["role"])

async def update_user(db: SupabaseClient, user_id: str, updates: Dict[str, Any], role: Optional[Role] = None) -> Dict[str, Any]:
    if "email" in updates and updates["email"] is not None:
        updates = {**updates, "email": normalize_email(updates["email"])}
        if await email_exists(db, updates["email"], exclude_id=user_id):
            raise DuplicateEmailError()

    if not updates:
        return await get_user(db, user_id, role)

    query = db.table(USERS).update(updates).eq("id", user_id)
    if role is not None:
        query = query.eq("role", role.value)
    response = await db.execute(
        query,
        "mise à jour utilisateur",
        errors={UNIQUE_VIOLATION: DuplicateEmailError()},
        message="Erreur lors de la mise à jour du profil"
    )
    if not response.data:
        raise NotFoundError("Utilisateur non trouvé")
    return response.data[0]

async def delete_user(db: SupabaseClient, user_id: str, role: Role) -> None:
    response = await db.execute(
        db.table(USERS).delete().eq("id", user_id).eq("role", role.value),
        f"suppression utilisateur ({role.value})",
        message="Erreur lors de la suppression"
    )
    if not response.data:
        raise NotFoundError("Utilisateur non trouvé")

async def change_password(db: SupabaseClient, user_id: str, current_password: str, new_password: str) -> None:
    """Changer le mot de passe après vérification de l'actuel"""
    row = await db.fetch_one(
        db.table(USERS).select("id").eq("id", user_id).eq("password", current_password),
        "vérification mot de passe"
    )
    if not row:
        raise InvalidPasswordError()

    await db.execute(
        db.table(USERS).update({"password": new_password}).eq("id", user_id),
        "changement mot de passe",
        message="Erreur lors du changement de mot de passe"
    )
    logger.info(f"Mot de passe modifié pour {user_id}")
