from pathlib import Path

from grocer.utilities.config import DATA_DIR

# Table file names inside a data directory
PRODUCTS_TABLE = 'products.json'
STORES_TABLE = 'stores.json'
STORE_PRICES_TABLE = 'store_prices.json'


def table_path(table: str, data_dir: Path = DATA_DIR) -> Path:
    return Path(data_dir) / table


__all__ = ['DATA_DIR', 'PRODUCTS_TABLE', 'STORES_TABLE', 'STORE_PRICES_TABLE', 'table_path']
