#!/usr/bin/env python3
"""
Start the Places Export API server.

Usage:
    python run_server.py
    HOST=0.0.0.0 PORT=8080 python run_server.py
"""
import logging
import os

import uvicorn

from places_export.config import LOG_LEVEL


def main():
    logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    uvicorn.run(
        "places_export.api:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
