from sqlalchemy.orm import declarative_base

# Base pour les modèles
Base = declarative_base()
