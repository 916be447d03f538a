"""
Portfolio service for manual holdings and tracked wallets.
"""
import logging

from sqlmodel import Session, select
from starlette.concurrency import run_in_threadpool

from defi_tracker.models.portfolio import DEFAULT_PORTFOLIO_NAME, Asset, Portfolio, Wallet
from defi_tracker.models.user import User
from defi_tracker.schemas.portfolio import AssetCreate, AssetResponse, PortfolioResponse
from defi_tracker.schemas.wallet import WalletBalance, WalletCreate
from defi_tracker.services.balance_service import WalletBalanceAggregator

logger = logging.getLogger(__name__)


class PortfolioService:
    """Service for portfolio operations."""

    def __init__(self, session: Session, aggregator: WalletBalanceAggregator):
        self.session = session
        self.aggregator = aggregator

    # ==================== Portfolio ====================

    def get_or_create_portfolio(self, user: User) -> Portfolio:
        """
        Return the user's first portfolio, creating the default one if absent.
        """
        statement = (
            select(Portfolio)
            .where(Portfolio.user_id == user.id)
            .order_by(Portfolio.id)
        )
        portfolio = self.session.exec(statement).first()
        if portfolio is not None:
            return portfolio

        portfolio = Portfolio(user_id=user.id, name=DEFAULT_PORTFOLIO_NAME)
        self.session.add(portfolio)
        self.session.commit()
        self.session.refresh(portfolio)

        logger.info(f"Created default portfolio {portfolio.id} for user {user.id}")
        return portfolio

    def _assets(self, portfolio: Portfolio) -> list[Asset]:
        statement = select(Asset).where(Asset.portfolio_id == portfolio.id).order_by(Asset.id)
        return list(self.session.exec(statement).all())

    def _wallets(self, portfolio: Portfolio) -> list[Wallet]:
        statement = select(Wallet).where(Wallet.portfolio_id == portfolio.id).order_by(Wallet.id)
        return list(self.session.exec(statement).all())

    async def _balances(self, wallets: list[Wallet]) -> list[WalletBalance]:
        return await self.aggregator.fetch_balances(
            [(w.address, w.chain) for w in wallets],
            wallet_ids=[w.id for w in wallets],
        )

    def _snapshot(self, user: User) -> tuple[Portfolio, list[Asset], list[Wallet]]:
        portfolio = self.get_or_create_portfolio(user)
        return portfolio, self._assets(portfolio), self._wallets(portfolio)

    async def get_portfolio(self, user: User) -> PortfolioResponse:
        """
        Get the user's portfolio with holdings and live wallet balances.

        Args:
            user: Authenticated user

        Returns:
            PortfolioResponse; wallet entries are in creation order
        """
        portfolio, assets, wallets = await run_in_threadpool(self._snapshot, user)
        balances = await self._balances(wallets)
        return PortfolioResponse.from_model(portfolio, assets, balances)

    # ==================== Holdings ====================

    def add_asset(self, user: User, data: AssetCreate) -> AssetResponse:
        """
        Record a manual holding in the user's portfolio.

        The purchase price is stored as 0; it is not looked up.
        """
        portfolio = self.get_or_create_portfolio(user)
        asset = Asset(
            portfolio_id=portfolio.id,
            asset_id=data.asset_id,
            blockchain=data.blockchain,
            amount=data.amount,
        )
        self.session.add(asset)
        self.session.commit()
        self.session.refresh(asset)
        return AssetResponse.from_model(asset)

    # ==================== Wallets ====================

    def _store_wallet(self, user: User, data: WalletCreate) -> Wallet:
        portfolio = self.get_or_create_portfolio(user)
        wallet = Wallet(portfolio_id=portfolio.id, address=data.address, chain=data.chain)
        self.session.add(wallet)
        self.session.commit()
        self.session.refresh(wallet)
        return wallet

    async def add_wallet(self, user: User, data: WalletCreate) -> WalletBalance:
        """
        Track a wallet and return it with a freshly fetched balance.

        The wallet row is stored even when the first fetch fails; the
        failure is reported in the returned `error`.
        """
        wallet = await run_in_threadpool(self._store_wallet, user, data)
        [balance] = await self._balances([wallet])
        return balance

    def _portfolio_wallets(self, user: User) -> list[Wallet]:
        return self._wallets(self.get_or_create_portfolio(user))

    async def refresh_balances(self, user: User) -> list[WalletBalance]:
        """Recompute balances for every wallet in the user's portfolio."""
        wallets = await run_in_threadpool(self._portfolio_wallets, user)
        return await self._balances(wallets)
