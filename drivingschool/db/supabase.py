from supabase import create_client, Client
from postgrest.exceptions import APIError
import asyncio
import logging
from typing import Any, Dict, Optional

from drivingschool.config import settings
from drivingschool.errors import BackendError, PortalError

logger = logging.getLogger(__name__)

# Codes d'erreur PostgreSQL / PostgREST
UNIQUE_VIOLATION = "23505"
EXCLUSION_VIOLATION = "23P01"
CHECK_VIOLATION = "23514"
NO_ROWS = "PGRST116"

class SupabaseClient:
    """Client Supabase partagé par toutes les couches d'accès aux données"""

    def __init__(self, client: Optional[Client] = None):
        if client is not None:
            self.client = client
            return

        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            logger.warning("Configuration Supabase manquante")
            self.client = None
            return

        try:
            self.client = create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_KEY
            )
            logger.info("Client Supabase initialisé")
        except Exception as e:
            logger.error(f"Erreur d'initialisation Supabase: {str(e)}")
            self.client = None

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def table(self, name: str):
        """Point d'entrée du constructeur de requêtes pour une table"""
        if not self.client:
            raise BackendError("Base de données non configurée")
        return self.client.table(name)

    async def execute(
        self,
        query,
        action: str,
        errors: Optional[Dict[str, PortalError]] = None,
        message: Optional[str] = None
    ) -> Any:
        """
        Exécuter une requête et normaliser les erreurs

        Le client Supabase est synchrone : l'appel part dans un thread pour
        que plusieurs requêtes indépendantes puissent être lancées en
        parallèle avec asyncio.gather.

        Args:
            query: Requête construite (select/insert/update/delete)
            action: Description courte pour les logs
            errors: Erreurs métier à lever selon le code PostgreSQL/PostgREST
            message: Message utilisateur en cas d'échec non prévu

        Returns:
            La réponse PostgREST (attributs `data` et `count`)
        """
        try:
            return await asyncio.to_thread(query.execute)
        except APIError as e:
            if errors and e.code in errors:
                logger.info(f"{action}: {e.code} ({e.message})")
                raise errors[e.code]
            logger.error(f"Erreur {action}: {e.message}")
            raise BackendError(message) from e
        except PortalError:
            raise
        except Exception as e:
            logger.error(f"Erreur {action}: {str(e)}")
            raise BackendError(message) from e

    async def fetch_one(self, query, action: str, message: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Première ligne d'un résultat ou None"""
        response = await self.execute(query.limit(1), action, message=message)
        return response.data[0] if response.data else None

    async def count(self, query, action: str) -> int:
        """Nombre de lignes pour une requête select(count="exact")"""
        response = await self.execute(query, action)
        return response.count or 0

# Instance globale
supabase_client = SupabaseClient()

def get_supabase() -> SupabaseClient:
    """Dépendance FastAPI pour le client Supabase"""
    return supabase_client
