from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from labstock.config import get_config
from labstock.exceptions import StoreError
from labstock.logging import get_logger

from ..interface import StockStore
from ..models import Order, Product, StockObservation

logger = get_logger(__name__)

PRODUCTS_FILE = "products.csv"
OBSERVATIONS_FILE = "observations.csv"
ORDERS_FILE = "orders.csv"
SETTINGS_FILE = "settings.csv"

PRODUCT_COLUMNS = ["product_id", "name", "url", "default_order_qty", "is_active"]
OBSERVATION_COLUMNS = ["observation_id", "product_id", "stock_count", "observed_at", "observer_name"]
ORDER_COLUMNS = [
    "order_id", "product_id", "order_qty", "order_type", "order_reason",
    "orderer_name", "ordered_at", "is_exported", "degraded",
]

_TRUE_VALUES = {"true", "1", "yes", "y"}


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return False
    return str(value).strip().lower() in _TRUE_VALUES


class CsvStockStore(StockStore):
    """
    CSV-backed implementation.
    - Reads from `data_dir` on every call, so appends are visible immediately.
    - Appends add one row to the end of the relevant file; existing rows are never rewritten.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            config = get_config()
            data_dir = config.data_dir

        self.data_dir = Path(data_dir)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            # Look up the directory tree for pyproject.toml
            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            self.data_dir = (repo_root or current) / self.data_dir

        if not self.data_dir.exists():
            raise StoreError(
                f"Data directory not found: {self.data_dir}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m labstock.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )
        if not (self.data_dir / PRODUCTS_FILE).exists():
            raise StoreError(
                f"Required CSV file missing in {self.data_dir}: {PRODUCTS_FILE}\n"
                f"Generate sample data with: python -m labstock.seed_data"
            )

    # ---------- loading helpers ----------

    def _read(self, filename: str, columns: List[str], **kwargs) -> pd.DataFrame:
        path = self.data_dir / filename
        if not path.exists() or path.stat().st_size == 0:
            return pd.DataFrame(columns=columns)
        try:
            kwargs.setdefault("dtype", {"product_id": str})
            return pd.read_csv(path, keep_default_na=False, na_values=[""], **kwargs)
        except Exception as e:
            raise StoreError(f"Error reading {path}: {e}") from e

    def _append(self, filename: str, columns: List[str], row: Dict[str, Any]) -> None:
        path = self.data_dir / filename
        write_header = not path.exists() or path.stat().st_size == 0
        try:
            pd.DataFrame([row], columns=columns).to_csv(path, mode="a", header=write_header, index=False)
        except OSError as e:
            raise StoreError(f"Error writing {path}: {e}") from e

    def _observations_frame(self) -> pd.DataFrame:
        df = self._read(OBSERVATIONS_FILE, OBSERVATION_COLUMNS)
        if df.empty:
            return df
        df["observed_at"] = _parse_timestamps(df["observed_at"])
        df["stock_count"] = pd.to_numeric(df["stock_count"], errors="coerce")

        bad = df["observed_at"].isna() | df["stock_count"].isna() | (df["stock_count"] < 0)
        if bad.any():
            logger.warning(f"Skipping {int(bad.sum())} unreadable observation rows in {OBSERVATIONS_FILE}")
            df = df.loc[~bad].copy()
        df["observer_name"] = df["observer_name"].fillna("").astype(str)
        return df

    # ---------- reads ----------

    def get_observation_history(self, product_id: str) -> List[StockObservation]:
        df = self._observations_frame()
        if df.empty:
            return []
        df = df[df["product_id"] == str(product_id)]
        return [
            StockObservation(
                observation_id=str(r.observation_id),
                product_id=str(r.product_id),
                stock_count=int(r.stock_count),
                observed_at=pd.Timestamp(r.observed_at).to_pydatetime(),
                observer_name=r.observer_name,
            )
            for r in df.itertuples(index=False)
        ]

    def get_product_catalog(self) -> List[Product]:
        df = self._read(PRODUCTS_FILE, PRODUCT_COLUMNS)
        products = []
        for r in df.itertuples(index=False):
            url = getattr(r, "url", None)
            products.append(
                Product(
                    product_id=str(r.product_id),
                    name=str(r.name),
                    url=None if url is None or pd.isna(url) else str(url),
                    default_order_qty=int(r.default_order_qty),
                    is_active=_to_bool(getattr(r, "is_active", True)),
                )
            )
        return products

    def get_settings(self) -> Optional[Dict[str, Any]]:
        df = self._read(SETTINGS_FILE, ["key", "value"], dtype=str)
        if df.empty:
            return None
        return {
            str(k): (None if pd.isna(v) else v)
            for k, v in zip(df["key"], df["value"])
        }

    def list_orders(self) -> List[Order]:
        """All orders in insertion order."""
        df = self._read(ORDERS_FILE, ORDER_COLUMNS)
        if df.empty:
            return []
        df["ordered_at"] = _parse_timestamps(df["ordered_at"])
        bad = df["ordered_at"].isna()
        if bad.any():
            logger.warning(f"Skipping {int(bad.sum())} order rows with unreadable ordered_at in {ORDERS_FILE}")
            df = df.loc[~bad]
        return [
            Order(
                order_id=str(r.order_id),
                product_id=str(r.product_id),
                order_qty=int(r.order_qty),
                order_type=str(r.order_type),
                order_reason=str(r.order_reason),
                orderer_name=str(r.orderer_name),
                ordered_at=pd.Timestamp(r.ordered_at).to_pydatetime(),
                is_exported=_to_bool(r.is_exported),
                degraded=_to_bool(r.degraded),
            )
            for r in df.itertuples(index=False)
        ]

    # ---------- appends ----------

    def append_observation(self, observation: StockObservation) -> StockObservation:
        row = observation.model_dump()
        row["observed_at"] = _iso(observation.observed_at)
        self._append(OBSERVATIONS_FILE, OBSERVATION_COLUMNS, row)
        return observation

    def append_order(self, order: Order) -> Order:
        row = order.model_dump()
        row["ordered_at"] = _iso(order.ordered_at)
        self._append(ORDERS_FILE, ORDER_COLUMNS, row)
        return order


def _iso(ts: datetime) -> str:
    return ts.isoformat()


def _parse_timestamps(values: pd.Series) -> pd.Series:
    """Parse ISO timestamps onto one naive UTC basis.

    Offset-aware values are converted to UTC and made naive. Naive values are
    taken to be on that basis already and come back unchanged, so rows written
    by this store round-trip as written. Unparseable values become NaT.
    """
    parsed = pd.to_datetime(values, errors="coerce", format="ISO8601", utc=True)
    return parsed.dt.tz_convert(None)
