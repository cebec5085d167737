from mtgprices.db.database import get_session, init_db, set_sql_trace
from mtgprices.db.operations import (
    CleanupResult,
    card_to_model,
    clean_card_prices,
    get_card_prices,
    get_price_history,
    insert_card_prices,
    model_to_card,
)

__all__ = [
    "CleanupResult",
    "card_to_model",
    "clean_card_prices",
    "get_card_prices",
    "get_price_history",
    "get_session",
    "init_db",
    "insert_card_prices",
    "model_to_card",
    "set_sql_trace",
]
