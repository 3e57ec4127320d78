from sqlalchemy import create_engine, text
from typing import Optional
import logging

from drivingschool.config import settings
from drivingschool.db.base import Base

logger = logging.getLogger(__name__)

_engine = None

def get_engine(url: Optional[str] = None):
    """Engine SQLAlchemy vers le PostgreSQL de Supabase (créé à la demande)"""
    global _engine
    if url is not None:
        return create_engine(url, pool_pre_ping=True, pool_recycle=300, echo=settings.DEBUG)
    if _engine is None:
        if not settings.DATABASE_URL:
            raise RuntimeError("DATABASE_URL non configurée")
        _engine = create_engine(
            settings.DATABASE_URL,
            pool_pre_ping=True,
            pool_recycle=300,
            echo=settings.DEBUG
        )
    return _engine

def init_db(engine=None):
    """
    Créer le schéma côté Supabase

    L'extension btree_gist est nécessaire aux contraintes d'exclusion
    de la table des leçons.
    """
    engine = engine or get_engine()
    try:
        # Importer tous les modèles ici
        from drivingschool.models import User, Vehicle, Lesson, Notification  # noqa: F401

        with engine.begin() as conn:
            conn.execute(text("CREATE EXTENSION IF NOT EXISTS btree_gist"))
        Base.metadata.create_all(bind=engine)
        logger.info("Base de données initialisée")

    except Exception as e:
        logger.error(f"Erreur initialisation base de données: {str(e)}")
        raise

def test_connection(engine=None) -> bool:
    """Tester la connexion à la base de données"""
    try:
        engine = engine or get_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Connexion à Supabase PostgreSQL réussie")
        return True
    except Exception as e:
        logger.error(f"Erreur connexion à Supabase: {str(e)}")
        return False
