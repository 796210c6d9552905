"""
Dreamcatcher Film API Runner
Run this as: python run_server.py
"""

import logging
import os
import sys

import uvicorn

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    port = int(os.getenv("PORT", "3001"))
    logger.info(f"🚀 Starting Dreamcatcher Film API on port {port}...")
    try:
        uvicorn.run("dreamcatcher.main:create_app", factory=True, host="0.0.0.0", port=port)  # noqa: S104
    except KeyboardInterrupt:
        logger.info("👋 Server stopped by user")
    except Exception as e:
        logger.error(f"❌ Server crashed: {e}")
        sys.exit(1)
