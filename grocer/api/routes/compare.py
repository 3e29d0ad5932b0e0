import logging

from fastapi import APIRouter, Depends, HTTPException

from grocer.api.auth import require_bearer
from grocer.api.dependencies import get_repository
from grocer.domain.Cart import Cart
from grocer.domain.Store import Store
from grocer.events.Event_Bus import EventBus
from grocer.infra.Price_Repository import PriceRepository
from grocer.logic.comparison.store_ranker import (
    analyze_stores, best_store, mrp_total, savings_vs_best
)
from grocer.logic.pricing.catalog import assemble_products
from grocer.utilities.money import round_half_up
from grocer.utilities.validators import CompareRequest

router = APIRouter(prefix="/api", dependencies=[Depends(require_bearer)])
logger = logging.getLogger(__name__)


@router.post("/compare")
def api_compare(payload: CompareRequest, repo: PriceRepository = Depends(get_repository)):
    """Rank stores for the posted cart.

    Response JSON structure:
        {
          "stores": [ { storeId, name, total, availableItems, unavailableItems, allAvailable, ... } ],
          "bestStore": <first entry or null>,
          "mrpTotal": <int>,
          "savings": <int>,
          "summary": { subtotal, mrpTotal, savings, deliveryFee, total, itemCount }
        }
    """
    stores = [Store.from_dict(r) for r in repo.list_stores()]
    products = {p.id: p for p in assemble_products(repo.list_products(), repo.list_store_prices())}

    # Server-side carts are throwaway; keep their events off the global bus
    cart = Cart().set_event_bus(EventBus())
    for item in payload.items:
        product = products.get(item.product_id)
        if product is None:
            raise HTTPException(status_code=404, detail="Product not found")
        cart.add(product, item.quantity)

    analyses = analyze_stores(cart.lines, stores)
    best = best_store(analyses)
    return {
        "stores": [a.to_dict() for a in analyses],
        "bestStore": best.to_dict() if best else None,
        "mrpTotal": round_half_up(mrp_total(cart.lines)),
        "savings": savings_vs_best(cart.lines, analyses),
        "summary": cart.summary().to_dict(),
    }
