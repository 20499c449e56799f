# pool_filters.py — run every configured filter against one pool
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

from solana.rpc.async_api import AsyncClient
from solders.pubkey import Pubkey

from config import (
    CONSECUTIVE_FILTER_MATCHES,
    FILTER_CHECK_DURATION_SECS,
    FILTER_CHECK_INTERVAL_SECS,
    FilterSettings,
)
from mutable_filter import FilterResult, MutableFilter
from socials import SocialsChecker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolKeys:
    base_mint: Pubkey
    quote_mint: Optional[Pubkey] = None
    id: Optional[Pubkey] = None


class Filter(Protocol):
    async def execute(self, pool_keys: PoolKeys) -> FilterResult: ...


class PoolFilters:
    """
    Holds the filters for a single pool. Build one per pool so per-filter
    caches stay keyed to that pool's base mint.
    """

    def __init__(
        self,
        client: AsyncClient,
        settings: FilterSettings,
        *,
        socials: Optional[SocialsChecker] = None,
    ) -> None:
        self.filters: List[Filter] = []
        if settings.check_mutable or settings.check_socials:
            self.filters.append(MutableFilter(client, settings, socials=socials))

    async def execute(self, pool_keys: PoolKeys) -> bool:
        if not self.filters:
            return True

        results = await asyncio.gather(*(f.execute(pool_keys) for f in self.filters))
        if all(r.ok for r in results):
            return True

        for r in results:
            if not r.ok:
                logger.debug(r.message)
        return False

    async def wait_for_match(
        self,
        pool_keys: PoolKeys,
        interval: float = FILTER_CHECK_INTERVAL_SECS,
        duration: float = FILTER_CHECK_DURATION_SECS,
        consecutive: int = CONSECUTIVE_FILTER_MATCHES,
    ) -> bool:
        """
        Re-run the filters every `interval` seconds for up to `duration`
        seconds; True once `consecutive` passes land in a row.
        """
        if interval <= 0 or duration <= 0:
            return True

        times_to_check = max(1, int(duration / interval))
        match_count = 0
        for times_checked in range(1, times_to_check + 1):
            if await self.execute(pool_keys):
                match_count += 1
                if match_count >= consecutive:
                    logger.debug(f"Filter match {match_count}/{consecutive} for {pool_keys.base_mint}")
                    return True
            else:
                match_count = 0
            if times_checked < times_to_check:
                await asyncio.sleep(interval)

        return False
