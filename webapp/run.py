#!/usr/bin/env python3
"""
Run script for the FairGrade Flask web application
"""

import os
import sys
from pathlib import Path

# Add the parent directory to the Python path so we can import from src/
parent_dir = Path(__file__).parent.parent
sys.path.insert(0, str(parent_dir))

from src.constants import DEFAULT_HOST, DEFAULT_PORT
from utils.logger import logger
from webapp.app_factory import create_app

app = create_app(os.getenv("FLASK_ENV", "development"))

if __name__ == "__main__":
    host = os.getenv("HOST", DEFAULT_HOST)
    port = int(os.getenv("PORT", DEFAULT_PORT))
    debug = os.getenv("FLASK_DEBUG", "1") == "1"

    logger.info(f"Starting FairGrade on http://{host}:{port} (debug={debug})")

    try:
        app.run(host=host, port=port, debug=debug, use_reloader=debug, threaded=True)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except OSError as e:
        logger.critical(f"Error starting server: {e}")
        sys.exit(1)
