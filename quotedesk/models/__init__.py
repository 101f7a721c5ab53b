# Registers all ORM models on Base.metadata

from .customer import Customer
from .pin import PinProfile
from .product import Product
from .quote import Quote
from .quote_approval import ApprovalStatus, QuoteApproval

__all__ = [
    "ApprovalStatus",
    "Customer",
    "PinProfile",
    "Product",
    "Quote",
    "QuoteApproval",
]
