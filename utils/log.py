import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO"):
    # Streamlit reruns the script on every interaction; only configure once.
    if getattr(configure_logging, "_applied", False):
        return
    configure_logging._applied = True
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
    )
    logging.getLogger(__name__).info("Logging configured (level=%s)", level)
