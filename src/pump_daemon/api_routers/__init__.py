"""
api_routers

FastAPI APIRouter modules defining the pump decoder daemon's endpoints.

Routers:
    - decode: Response decoding, session pump model, health and metrics endpoints
"""

from .decode import api_router_decode

__all__ = ["api_router_decode"]
