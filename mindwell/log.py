import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_configured = False


def configure_logging(level: str = "INFO"):
    """Install the console handler once; Streamlit re-runs the script on every interaction."""
    global _configured
    if _configured:
        logging.getLogger("mindwell").setLevel(level)
        return
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
    logging.getLogger("mindwell").setLevel(level)
    _configured = True
