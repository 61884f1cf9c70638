"""Application wiring: logging, store and service construction."""

import logging
import sys
from typing import Optional

from .config import Config, load_config
from .database import SupabaseStore
from .services import OpportunityService

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=config.log_level.upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def create_store(config: Config) -> SupabaseStore:
    return SupabaseStore(
        config.supabase_url,
        config.supabase_key,
        opportunities_table=config.opportunities_table,
        tags_table=config.tags_table,
        opportunity_tags_table=config.opportunity_tags_table,
        read_retry_attempts=config.read_retry_attempts,
    )


def create_service(config: Optional[Config] = None) -> OpportunityService:
    """Build a ready OpportunityService from configuration.

    Loads (and validates) the environment when no config is given.
    """
    if config is None:
        config = load_config()
    configure_logging(config)
    logger.info("Opportunity catalog using %s", config.supabase_url)
    return OpportunityService(create_store(config))
