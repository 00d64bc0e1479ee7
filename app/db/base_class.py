from sqlalchemy.orm import declarative_base

# Declarative base shared by every table model and by Alembic autogenerate
Base = declarative_base()
