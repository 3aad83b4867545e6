from __future__ import annotations

from typing import Literal

from labstock.config import get_config

from .backends.csv_backend import CsvStockStore
from .interface import StockStore


def get_stock_store(kind: Literal["csv"] = "csv") -> StockStore:
    if kind == "csv":
        # Reads from configured CSV folder
        config = get_config()
        return CsvStockStore(data_dir=config.data_dir)
    raise ValueError(f"Unknown stock store kind: {kind}")
