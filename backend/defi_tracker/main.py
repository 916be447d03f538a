"""
DeFi Tracker Backend - FastAPI Application

A crypto portfolio tracker with CoinGecko market data and live on-chain
wallet balances.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from defi_tracker.config import get_settings
from defi_tracker.core.logging_config import configure_logging
from defi_tracker.database.connections import close_connections, create_db_and_tables
from defi_tracker.routers import auth, health, market, portfolio
from defi_tracker.services.balance_service import close_balance_aggregator
from defi_tracker.services.coingecko_api import close_coingecko_api

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Configure logging
    - Create database tables

    Shutdown:
    - Close RPC and CoinGecko HTTP clients
    - Close database and Redis connections
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting up DeFi Tracker Backend...")

    try:
        create_db_and_tables()
        logger.info("Database tables ready")
    except SQLAlchemyError as e:
        logger.warning(f"Database initialization warning: {e}")

    yield

    # Shutdown
    logger.info("Shutting down DeFi Tracker Backend...")
    await close_balance_aggregator()
    await close_coingecko_api()
    await close_connections()
    logger.info("Connections closed")


# Create FastAPI application
app = FastAPI(
    title="DeFi Tracker API",
    description="""
## Crypto Portfolio Tracker API

### Features
- **Authentication**: username/password with a session cookie
- **Portfolio**: manual holdings and tracked wallets with live balances
- **Market**: top assets, trending coins and news from CoinGecko

### Authentication
Protected endpoints read the `session` cookie set by `POST /api/login`
or `POST /api/register`.

### Wallet balances
Balances are fetched live from Ethereum and Solana RPC endpoints. A wallet
that cannot be fetched is returned with `balance: "0"` and an `error`
message; the rest of the response is unaffected.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report body validation failures as 400 with the offending field names."""
    fields: list[str] = []
    missing = False
    for error in exc.errors():
        if error.get("type") == "missing":
            missing = True
        names = [part for part in error.get("loc", ()) if isinstance(part, str) and part != "body"]
        if names and names[-1] not in fields:
            fields.append(names[-1])

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Missing required fields" if missing else "Invalid request body",
            "required": fields,
        },
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(portfolio.router)
app.include_router(market.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "DeFi Tracker API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
