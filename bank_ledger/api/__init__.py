"""
Bank Ledger API Application Factory
"""

from typing import Optional

from fastapi import FastAPI

from .accounts import router as accounts_router
from .operations import router as operations_router
from .reports import router as reports_router
from .. import __version__
from ..config import get_config
from ..ledger import Ledger
from ..seed import build_demo_ledger


def create_app(ledger: Optional[Ledger] = None) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        ledger: Ledger to serve; when omitted a new one is created, holding
            the demonstration accounts if seed_demo_accounts is enabled
    """
    if ledger is None:
        config = get_config()
        ledger = build_demo_ledger(config) if config.seed_demo_accounts else Ledger(config=config)

    app = FastAPI(
        title="Bank Ledger API",
        description="In-memory bank ledger with transfers, payments and interest",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.ledger = ledger

    # Include routers
    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    app.include_router(operations_router, tags=["Operations"])
    app.include_router(reports_router, tags=["Reports"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "bank_ledger_api",
            "version": __version__
        }

    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Bank Ledger API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "accounts": "/accounts",
                "transfers": "/transfers",
                "payments": "/payments",
                "interest": "/interest",
                "user_balance": "/users/{user_id}/balance",
                "bank_balance": "/bank/balance"
            }
        }

    return app
