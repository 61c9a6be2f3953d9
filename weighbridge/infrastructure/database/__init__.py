from .db import build_engine, engine, get_session, init_db
from .repositories import SqlTripSettlementRepository, SqlWeighingProcessRepository

__all__ = [
    "SqlTripSettlementRepository",
    "SqlWeighingProcessRepository",
    "build_engine",
    "engine",
    "get_session",
    "init_db",
]
