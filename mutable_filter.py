# mutable_filter.py — metadata mutability + socials trust check for a pool's base mint
import logging
from dataclasses import dataclass
from typing import Optional

from solana.rpc.async_api import AsyncClient

from config import COMMITMENT_LEVEL, FilterSettings
from ledger import fetch_account_data
from metadata import decode_metadata, get_pda_metadata_key
from retry_utils import short_error
from socials import SocialsChecker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterResult:
    ok: bool
    message: Optional[str] = None


class MutableFilter:
    """
    Rejects tokens whose metadata can still be changed, or whose off-chain
    metadata carries no socials.

    One instance is meant to track one token. Once the token is seen as
    immutable (or mutability isn't checked) the result is kept for the life
    of the instance and returned without further I/O, even if the socials
    later change.
    """

    def __init__(
        self,
        client: AsyncClient,
        settings: FilterSettings,
        *,
        socials: Optional[SocialsChecker] = None,
        commitment: Optional[str] = COMMITMENT_LEVEL,
    ) -> None:
        self.client = client
        self.settings = settings
        self.socials = socials or SocialsChecker(settings)
        self.commitment = commitment
        self._cached_result: Optional[FilterResult] = None
        self._error_message = " and ".join(settings.configured_checks)

    @property
    def cached_result(self) -> Optional[FilterResult]:
        return self._cached_result

    async def execute(self, pool_keys) -> FilterResult:
        if self._cached_result is not None:
            return self._cached_result

        mint = getattr(pool_keys, "base_mint", None)
        try:
            metadata_pda = get_pda_metadata_key(mint)
            data = await fetch_account_data(self.client, metadata_pda, self.commitment)
            if not data:
                return FilterResult(False, "Mutable -> Failed to fetch account data")

            record = decode_metadata(data)
            mutable = self.settings.check_mutable and record.is_mutable
            has_socials = not self.settings.check_socials or await self.socials.has_socials(record)
            ok = not mutable and has_socials

            reasons = []
            if mutable:
                reasons.append("metadata can be changed")
            if not has_socials:
                reasons.append("has no socials")
            result = FilterResult(ok, None if ok else f"MutableSocials -> Token {' and '.join(reasons)}")

            # cached only once the token is known immutable (or mutability is unchecked)
            if not mutable:
                if self._cached_result is None:
                    self._cached_result = result
                    logger.debug(f"MutableSocials -> cached result for {mint}: ok={ok}")
                return self._cached_result
            return result
        except Exception as e:
            logger.error(
                f"MutableSocials -> Failed to check {self._error_message} for {mint}: {short_error(e)}",
                extra={"mint": str(mint), "checks": self.settings.configured_checks},
            )

        return FilterResult(False, f"MutableSocials -> Failed to check {self._error_message}")
