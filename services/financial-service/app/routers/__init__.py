"""API routers for the financial service."""

from app.routers.financial import router as financial_router

__all__ = ["financial_router"]
