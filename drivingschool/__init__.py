"""Portail de gestion d'auto-école adossé à Supabase."""

__version__ = "0.1.0"
