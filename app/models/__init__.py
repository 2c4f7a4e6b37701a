# Import all models to ensure they are registered with SQLAlchemy
from . import listing, viewing

__all__ = [
    "listing",
    "viewing",
]
