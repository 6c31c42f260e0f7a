from shopledger.database.base import Base
from shopledger.database.engine import create_db_engine, engine
from shopledger.database.session import SessionLocal, get_db, make_session_factory

__all__ = ["Base", "SessionLocal", "create_db_engine", "engine", "get_db", "make_session_factory"]
