"""
Bank Ledger API Application Factory
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from .deps import BankSystem, get_bank_system
from .branches import router as branches_router
from .clients import router as clients_router
from .accounts import router as accounts_router
from .transactions import router as transactions_router
from .compliance import router as compliance_router


def create_app(system: Optional[BankSystem] = None) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        system: Bank to serve; defaults to the one built from configuration
    """
    app = FastAPI(
        title="Bank Ledger API",
        description="Multi-branch bank with deposits, withdrawals, transfers and a regulatory log",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if system is not None:
        app.dependency_overrides[get_bank_system] = lambda: system

    app.include_router(branches_router, prefix="/branches", tags=["Branches"])
    app.include_router(clients_router, prefix="/clients", tags=["Clients"])
    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    app.include_router(transactions_router, prefix="/transactions", tags=["Transactions"])
    app.include_router(compliance_router, prefix="/compliance", tags=["Compliance"])

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
                "branches": "/branches",
                "clients": "/clients",
                "accounts": "/accounts",
                "transactions": "/transactions",
                "compliance": "/compliance/report",
            }
        }

    return app


def run_server(host: str = "0.0.0.0", port: int = 8090, debug: bool = False):
    """Run the FastAPI server"""
    uvicorn.run(
        "bank_ledger.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=debug,
        log_level="info"
    )
