# socials.py — off-chain metadata JSON fetch + socials predicates
import logging
from typing import Any, Dict, Optional

import aiohttp

from config import METADATA_FETCH_TIMEOUT_SECS, FilterSettings
from metadata import MetadataAccountData

logger = logging.getLogger(__name__)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def evaluate_socials(document: Any, settings: FilterSettings) -> bool:
    """
    True if the off-chain document advertises socials under `settings`.

    Any-signal mode passes on image/description/telegram/twitter/website, and
    otherwise on any truthy value under `extensions`. Selective mode ORs only
    the enabled checks.
    """
    doc = _as_dict(document)
    extensions = _as_dict(doc.get("extensions"))
    image = doc.get("image")
    description = doc.get("description")
    website = extensions.get("website")
    twitter = extensions.get("twitter")
    telegram = extensions.get("telegram")
    logger.debug(f"socials: image={image!r} description={description!r} website={website!r} twitter={twitter!r} telegram={telegram!r}")

    if settings.any_social:
        if image or description or telegram or twitter or website:
            return True
        return any(extensions.values())

    return bool(
        (settings.check_image and image)
        or (settings.check_description and description)
        or (settings.check_telegram and telegram)
        or (settings.check_twitter and twitter)
        or (settings.check_website and website)
    )


class SocialsChecker:
    """Fetches a token's metadata JSON and runs `evaluate_socials` on it."""

    def __init__(
        self,
        settings: FilterSettings,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = METADATA_FETCH_TIMEOUT_SECS,
    ) -> None:
        self.settings = settings
        self.session = session
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def _get_json(self, session: aiohttp.ClientSession, uri: str) -> Any:
        async with session.get(uri, timeout=self.timeout) as r:
            r.raise_for_status()
            # IPFS/Arweave gateways often serve JSON as text/plain
            return await r.json(content_type=None)

    async def fetch_document(self, uri: str) -> Any:
        """GET `uri` and parse it as JSON; network and decode errors propagate."""
        if self.session is not None:
            return await self._get_json(self.session, uri)
        async with aiohttp.ClientSession() as session:
            return await self._get_json(session, uri)

    async def has_socials(self, record: MetadataAccountData) -> bool:
        document = await self.fetch_document(record.uri)
        return evaluate_socials(document, self.settings)
