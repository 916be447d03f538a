"""
Portfolio router for manual holdings and tracked wallets.
"""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Session

from defi_tracker.database.connections import get_session
from defi_tracker.dependencies.auth import CurrentUser
from defi_tracker.schemas.portfolio import AssetCreate, AssetResponse, PortfolioResponse
from defi_tracker.schemas.wallet import WalletBalance, WalletCreate
from defi_tracker.services.balance_service import WalletBalanceAggregator, get_balance_aggregator
from defi_tracker.services.portfolio_service import PortfolioService

router = APIRouter(prefix="/api/portfolio", tags=["Portfolio"])


def get_portfolio_service(
    session: Annotated[Session, Depends(get_session)],
    aggregator: Annotated[WalletBalanceAggregator, Depends(get_balance_aggregator)],
) -> PortfolioService:
    """Dependency to get PortfolioService instance."""
    return PortfolioService(session, aggregator)


PortfolioServiceDep = Annotated[PortfolioService, Depends(get_portfolio_service)]


@router.get(
    "",
    response_model=PortfolioResponse,
    response_model_exclude_none=True,
    summary="Get portfolio",
)
async def get_portfolio(current_user: CurrentUser, portfolio_service: PortfolioServiceDep):
    """
    Get the user's portfolio with manual holdings and live wallet balances.

    The default portfolio is created on first access.
    """
    return await portfolio_service.get_portfolio(current_user)


@router.post(
    "/assets",
    response_model=AssetResponse,
    summary="Add manual holding",
)
def add_asset(
    body: AssetCreate,
    current_user: CurrentUser,
    portfolio_service: PortfolioServiceDep,
):
    """
    Record a manual holding.

    - **assetId**: CoinGecko coin id
    - **amount**: Quantity held (> 0)
    - **blockchain**: Blockchain tag
    """
    return portfolio_service.add_asset(current_user, body)


@router.post(
    "/wallets",
    response_model=WalletBalance,
    response_model_exclude_none=True,
    summary="Track wallet",
)
async def add_wallet(
    body: WalletCreate,
    current_user: CurrentUser,
    portfolio_service: PortfolioServiceDep,
):
    """
    Track an on-chain address and return it with a fresh balance.

    - **address**: Wallet address
    - **chain**: `ethereum` or `solana`
    """
    return await portfolio_service.add_wallet(current_user, body)


@router.post(
    "/refresh-balances",
    response_model=list[WalletBalance],
    response_model_exclude_none=True,
    summary="Refresh wallet balances",
)
async def refresh_balances(current_user: CurrentUser, portfolio_service: PortfolioServiceDep):
    """Recompute balances for all wallets, in wallet creation order."""
    return await portfolio_service.refresh_balances(current_user)
