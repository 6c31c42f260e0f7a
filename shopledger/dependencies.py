from shopledger.database.session import get_db

__all__ = ["get_db"]
