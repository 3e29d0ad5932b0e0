import json
import logging

from fastapi import APIRouter, Depends, Request

from grocer.api.auth import require_bearer
from grocer.api.dependencies import get_repository
from grocer.domain.Product import Product
from grocer.domain.Store import Store
from grocer.domain.StoreQuote import StoreQuote
from grocer.infra.Price_Repository import PriceRepository
from grocer.logic.deals.deal_finder import find_deals
from grocer.utilities.validators import DealFilterInput

router = APIRouter(prefix="/api", dependencies=[Depends(require_bearer)])
logger = logging.getLogger(__name__)


async def _read_filters(request: Request) -> DealFilterInput:
    """Filters are optional; an empty or unparseable body means defaults."""
    raw = await request.body()
    if not raw:
        return DealFilterInput()
    try:
        body = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring malformed deal filter body")
        return DealFilterInput()
    return DealFilterInput.from_raw(body)


@router.post("/deals")
def api_deals(filters: DealFilterInput = Depends(_read_filters),
              repo: PriceRepository = Depends(get_repository)):
    """Return up to 30 current deals.

    Response JSON structure:
        { "deals": [ { productName, originalPrice, dealPrice, savings, savingsPercent,
                       store, storeLogo, category, quality, productId, storeId } ] }
    """
    products = [Product.from_dict(r) for r in repo.list_products()]
    quotes = [StoreQuote.from_dict(r) for r in repo.list_store_prices(discounted_only=True)]
    stores = [Store.from_dict(r) for r in repo.list_stores()]

    deals = find_deals(products, quotes, stores, category=filters.category, max_price=filters.max_price)
    logger.info("Deal finder category=%s max_price=%s -> %d deals",
                filters.category, filters.max_price, len(deals))
    return {"deals": [d.to_dict() for d in deals]}
