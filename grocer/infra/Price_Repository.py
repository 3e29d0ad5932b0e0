"""Price repository: read-only access to the products, stores and store_prices tables."""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from grocer.infra.paths import (
    DATA_DIR, PRODUCTS_TABLE, STORES_TABLE, STORE_PRICES_TABLE, table_path
)

logger = logging.getLogger(__name__)

# Numeric columns per table, with the conversion the domain objects apply
NUMERIC_COLUMNS = {
    PRODUCTS_TABLE: {},
    STORES_TABLE: {"rating": float, "delivery_fee": float, "min_order": float},
    STORE_PRICES_TABLE: {
        "current_price": float, "base_price": float,
        "discount_percent": float, "stock_level": int,
    },
}


class UpstreamDataError(RuntimeError):
    """The product, price or store data could not be read."""


class PriceRepository:
    def __init__(self, data_dir: Path = DATA_DIR):
        self.data_dir = Path(data_dir)

    def _load(self, table: str) -> List[Dict[str, Any]]:
        path = table_path(table, self.data_dir)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                rows = json.load(f)
        except FileNotFoundError as e:
            logger.error("Table file not found: %s", path)
            raise UpstreamDataError(f"{table} unavailable") from e
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in %s: %s", path, e)
            raise UpstreamDataError(f"{table} unreadable") from e
        except OSError as e:
            logger.error("Error reading %s: %s", path, e)
            raise UpstreamDataError(f"{table} unreadable") from e
        if not isinstance(rows, list):
            logger.error("Expected a list of rows in %s, got %s", path, type(rows).__name__)
            raise UpstreamDataError(f"{table} malformed")
        rows = [r for r in rows if isinstance(r, dict)]
        self._check_numbers(table, path, rows)
        return rows

    @staticmethod
    def _check_numbers(table: str, path: Path, rows: List[Dict[str, Any]]):
        """Reject rows whose numeric columns would not decode."""
        for index, row in enumerate(rows):
            for column, convert in NUMERIC_COLUMNS.get(table, {}).items():
                value = row.get(column)
                try:
                    convert(value or 0)
                except (TypeError, ValueError, OverflowError) as e:
                    logger.error("Bad %s %r in row %d of %s", column, value, index, path)
                    raise UpstreamDataError(f"{table} malformed") from e

    def list_products(self, category: Optional[str] = None,
                      product_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Active products, optionally narrowed to one category (exact match) or one id."""
        rows = [r for r in self._load(PRODUCTS_TABLE) if r.get('is_active', True) is not False]
        if category:
            rows = [r for r in rows if r.get('category') == category]
        if product_id:
            rows = [r for r in rows if str(r.get('id')) == product_id]
        return rows

    def list_stores(self) -> List[Dict[str, Any]]:
        """All stores, highest rated first."""
        rows = self._load(STORES_TABLE)
        return sorted(rows, key=lambda r: float(r.get('rating') or 0), reverse=True)

    def list_store_prices(self, store_id: Optional[str] = None,
                          discounted_only: bool = False) -> List[Dict[str, Any]]:
        """Price rows, optionally for one store or only discounted rows in stock."""
        rows = self._load(STORE_PRICES_TABLE)
        if store_id:
            rows = [r for r in rows if str(r.get('store_id')) == store_id]
        if discounted_only:
            rows = [r for r in rows
                    if float(r.get('discount_percent') or 0) > 0 and r.get('is_available') is True]
        return rows


__all__ = ['PriceRepository', 'UpstreamDataError']
