from app.database.base import Base
from app.database.connector import DatabaseConnector
from app.database.engine import build_engine
from app.database.session import get_connector, get_db

__all__ = ["Base", "DatabaseConnector", "build_engine", "get_connector", "get_db"]
