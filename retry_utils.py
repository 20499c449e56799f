import asyncio
import logging

logger = logging.getLogger(__name__)


def short_error(e: BaseException) -> str:
    """Trim Solana/RPC errors so log lines stay on one line."""
    msg = str(e)
    if not msg:
        return repr(e)
    line = msg.splitlines()[0]
    if "custom program error" in line:
        return "custom program error" + line.split("custom program error")[-1]
    return line


async def retry_async(func, *args, retries=2, delay=0.25, backoff=2, exceptions=(Exception,), **kwargs):
    """
    Await func(*args, **kwargs), retrying up to `retries` extra times with
    exponential backoff. The last error is re-raised once retries run out.
    """
    attempt = 0
    while True:
        try:
            return await func(*args, **kwargs)
        except exceptions as e:
            attempt += 1
            if attempt > retries:
                if retries:
                    logger.warning(f"Giving up on {func.__name__} after {retries} retries: {short_error(e)}")
                raise
            logger.debug(f"Retry {attempt}/{retries} for {func.__name__} due to {short_error(e)}; sleeping {delay}s")
            await asyncio.sleep(delay)
            delay *= backoff
