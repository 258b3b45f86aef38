"""Route modules."""

from .auth import router as auth_router
from .funds import router as funds_router
from .portfolios import router as portfolios_router
from .users import router as users_router

__all__ = ["auth_router", "funds_router", "portfolios_router", "users_router"]
