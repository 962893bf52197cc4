# ===== IMPORTS & DEPENDENCIES =====
import logging

from aiohttp import web

from gamevault.api.web import create_app
from gamevault.config import LOG_LEVEL, HOST, PORT

# ===== CONFIGURATION & CONSTANTS =====
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


# ===== INITIALIZATION & STARTUP =====
def main() -> None:
    """Runs the IGDB gateway HTTP server."""
    logger.info(f"🚀 Starting gamevault gateway on {HOST}:{PORT}")
    web.run_app(create_app(), host=HOST, port=PORT, print=None)


if __name__ == "__main__":
    main()
