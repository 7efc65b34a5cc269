import logging

from feedback_portal.core import config
from feedback_portal.database import Store
from feedback_portal.seed import seed_demo_data

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


def create_store(seed: bool | None = None, **store_options) -> Store:
    """Build the process-wide store, seeding demo data when configured."""
    config.validate_runtime_config()

    store = Store(**store_options)
    should_seed = config.STORE_SEED_DEMO_DATA if seed is None else seed
    if should_seed:
        try:
            seed_demo_data(store, random_seed=config.STORE_SEED_RANDOM_SEED)
        except ValueError:
            logger.exception('Seeding demo data failed. Starting with an empty store.')
            store.close()

    logger.info(
        'Store ready (%s): %d users, %d courses, %d feedback records.',
        config.APP_ENV, len(store.users), len(store.courses), len(store.feedback),
    )
    return store


def shutdown_store(store: Store) -> None:
    store.close()
    logger.info('Store closed.')
