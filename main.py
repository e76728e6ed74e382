# ------------------------------------------------------------------------------
# Main Script for the DeerWatch Detection API
# main.py
# ------------------------------------------------------------------------------
from config import get_config
config = get_config()
from logging_config import get_logger
logger = get_logger(__name__)

from core.context import ServiceContext
from web.web_interface import create_web_interface

_debug = config["DEBUG_MODE"]
logger.info(f"Debug mode is {'enabled' if _debug else 'disabled'}.")

# One context per process; clients are created on first request.
context = ServiceContext(config)

# Expose the Flask server as the WSGI app.
interface = create_web_interface(context)
app = interface["server"]

if __name__ == '__main__':
    interface["run"](debug=_debug, host=config["WEB_HOST"], port=config["WEB_PORT"])
