import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from grocer.api.auth import require_bearer
from grocer.api.dependencies import get_repository
from grocer.domain.Store import Store
from grocer.domain.StoreQuote import StoreQuote
from grocer.infra.Price_Repository import PriceRepository
from grocer.logic.pricing.catalog import assemble_products
from grocer.logic.pricing.snapshot import build_price_snapshot
from grocer.utilities.validators import InvalidQueryParameter, validate_price_query

router = APIRouter(prefix="/api", dependencies=[Depends(require_bearer)])
logger = logging.getLogger(__name__)


@router.get("/live-prices")
def api_live_prices(category: Optional[str] = Query(default=None),
                    store_id: Optional[str] = Query(default=None, alias="storeId"),
                    product_id: Optional[str] = Query(default=None, alias="productId"),
                    repo: PriceRepository = Depends(get_repository)):
    """Current price snapshot for every active product across stores."""
    try:
        validate_price_query(category, store_id, product_id)
    except InvalidQueryParameter as e:
        raise HTTPException(status_code=400, detail=str(e))

    category_filter = category if category and category != 'All' else None
    stores = [Store.from_dict(r) for r in repo.list_stores()]
    product_rows = repo.list_products(category=category_filter, product_id=product_id)
    price_rows = repo.list_store_prices(store_id=store_id)

    products = assemble_products(product_rows, price_rows)
    quotes = [StoreQuote.from_dict(r) for r in price_rows]
    snapshot = build_price_snapshot(products, stores, quotes)
    logger.debug("Live prices: %d products, %d stores", len(products), len(stores))
    return snapshot
