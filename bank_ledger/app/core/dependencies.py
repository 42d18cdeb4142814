from functools import lru_cache

from ..services import Ledger
from .config import get_settings

@lru_cache()
def get_ledger() -> Ledger:
    return Ledger(id_prefix=get_settings().account_id_prefix)
