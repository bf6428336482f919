import logging
import sys

from storefront.config import settings


def configure_logging(level: str = None) -> None:
    """
    Configure root logging once for the process. Safe to call repeatedly;
    basicConfig is a no-op when handlers are already installed.
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Suppress noisy logs from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
