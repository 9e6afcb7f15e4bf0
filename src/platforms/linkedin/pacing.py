"""Jittered delays between guest-API page requests."""

import asyncio
import logging
import random

from src.core.config import LinkedInConfig

logger = logging.getLogger(__name__)


def pick_page_delay(config: LinkedInConfig) -> float:
    """Uniform delay in ``[page_delay_min_s, page_delay_max_s]``, never negative."""
    low = max(config.page_delay_min_s, 0.0)
    high = max(config.page_delay_max_s, low)
    return random.uniform(low, high)


async def wait_between_pages(config: LinkedInConfig) -> float:
    """Sleep for one jittered page delay and return how long it was."""
    delay = pick_page_delay(config)
    logger.debug("Waiting %.2fs before the next page", delay)
    await asyncio.sleep(delay)
    return delay
