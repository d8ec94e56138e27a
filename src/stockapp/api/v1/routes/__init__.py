"""
API v1 Routes

Blueprints organized by category for Swagger UI navigation.
"""

from .user_routes import blp as users_bp
from .stock_routes import blp as stocks_bp

__all__ = [
    "users_bp",
    "stocks_bp",
]
