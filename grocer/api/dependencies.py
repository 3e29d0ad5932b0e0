from grocer.infra.Price_Repository import PriceRepository
from grocer.utilities import config


def get_repository() -> PriceRepository:
    """Repository over the configured data directory (overridden in tests)."""
    return PriceRepository(config.DATA_DIR)
