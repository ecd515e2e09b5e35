import logging


def configure_logging(level: str = "INFO"):
    """Set up root logging for scripts and embedding applications."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
