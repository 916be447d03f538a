"""
Registry mapping chain tags to balance fetcher classes.
"""
from typing import Optional

from defi_tracker.chains.base import BalanceFetcher


class ChainRegistry:
    """
    Fetcher classes register themselves with `@ChainRegistry.register`.

    The aggregator only dispatches to chains present here.
    """

    _fetchers: dict[str, type[BalanceFetcher]] = {}

    @classmethod
    def register(cls, fetcher_class: type[BalanceFetcher]) -> type[BalanceFetcher]:
        """
        Decorator to register a fetcher under its `chain` tag.

        Raises:
            ValueError: If the class does not define `chain`
        """
        if not getattr(fetcher_class, "chain", ""):
            msg = f"Fetcher {fetcher_class.__name__} must define 'chain' attribute"
            raise ValueError(msg)

        cls._fetchers[fetcher_class.chain] = fetcher_class
        return fetcher_class

    @classmethod
    def get_fetcher_class(cls, chain: str) -> Optional[type[BalanceFetcher]]:
        return cls._fetchers.get(chain)

    @classmethod
    def supported_chains(cls) -> list[str]:
        return sorted(cls._fetchers)
