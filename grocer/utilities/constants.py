import re
from typing import Final

# Deal finder
HOT_DEAL_PERCENT: Final[int] = 15
GOOD_DEAL_PERCENT: Final[int] = 8
MAX_DEALS: Final[int] = 30
DEFAULT_STORE_LOGO: Final[str] = "🏪"

# Cart
FREE_DELIVERY_ABOVE: Final[int] = 500
STANDARD_DELIVERY_FEE: Final[int] = 30

# Live price query limits
MAX_CATEGORY_LENGTH: Final[int] = 100
UUID_PATTERN: Final[re.Pattern] = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$', re.IGNORECASE
)

GENERIC_ERROR: Final[str] = "An error occurred"
