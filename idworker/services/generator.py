"""
Process-wide Snowflake generator.

Host processes usually want a single IdGenerator whose identity comes from
the environment rather than from code. This module builds that generator once
during startup and hands it out afterwards, the same way a service keeps one
shared database or cache client for its whole lifetime.

Configuration:
    - WORKER_ID: worker identifier within the datacenter (0-31)
    - DATACENTER_ID: datacenter identifier (0-31)

Assigning distinct (WORKER_ID, DATACENTER_ID) pairs to the running processes
is left to whoever deploys them.

Example:
    >>> generator = init_generator()
    >>> snowflake_id = generate_id()
"""

import threading
from typing import Optional

from idworker.core.config import settings
from idworker.services.logger import setup_logger
from idworker.utils.snowflake import IdGenerator

# Global generator instance
id_generator: Optional[IdGenerator] = None
_generator_lock = threading.Lock()

logger = setup_logger()


def init_generator(
    worker_id: Optional[int] = None, datacenter_id: Optional[int] = None
) -> IdGenerator:
    """
    Create the global IdGenerator for this process.

    Args:
        worker_id: Overrides settings.WORKER_ID when given.
        datacenter_id: Overrides settings.DATACENTER_ID when given.

    Returns:
        IdGenerator: The newly created global generator.

    Raises:
        InvalidIdentityError: If the resolved worker or datacenter id is out of
            range. The previous global generator, if any, is kept.
    """
    global id_generator

    if worker_id is None:
        worker_id = settings.WORKER_ID
    if datacenter_id is None:
        datacenter_id = settings.DATACENTER_ID

    generator = IdGenerator(worker_id=worker_id, datacenter_id=datacenter_id)

    with _generator_lock:
        if id_generator is not None:
            logger.warning(
                "Replacing existing Snowflake generator %r with %r",
                id_generator,
                generator,
            )
        id_generator = generator

    logger.info(
        "Snowflake generator initialized (worker_id=%s, datacenter_id=%s, env=%s)",
        worker_id,
        datacenter_id,
        settings.ENV,
    )
    return generator


def get_generator() -> IdGenerator:
    """
    Retrieve the global IdGenerator.

    Raises:
        RuntimeError: If init_generator() has not been called.
    """
    if id_generator is None:
        logger.error(
            "Snowflake generator not initialized. Call init_generator() first."
        )
        raise RuntimeError("Snowflake generator not initialized")

    return id_generator


def generate_id() -> int:
    """Mint the next ID from the global generator."""
    return get_generator().next_id()


def reset_generator() -> None:
    global id_generator

    with _generator_lock:
        id_generator = None
    logger.debug("Snowflake generator reset")
