#!/usr/bin/env python
"""
Run the Latchkey API server.

Usage:
    python run_api.py
    python run_api.py --reload            # Development mode
    python run_api.py --log-level debug   # Show one-time links from the logging sender
"""

import argparse
import os
import sys

import uvicorn

from shared.config import get_settings


def main() -> int:
    parser = argparse.ArgumentParser(description="Run Latchkey API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument("--log-level", type=str, help="Override LOG_LEVEL")
    args = parser.parse_args()

    if args.log_level:
        # The app reads LOG_LEVEL itself, including in reload workers.
        os.environ["LOG_LEVEL"] = args.log_level

    try:
        settings = get_settings()
    except ValueError as e:
        # pydantic's ValidationError subclasses ValueError
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    reload = args.reload or settings.reload
    if reload and settings.is_production:
        print("Refusing to enable auto-reload in production", file=sys.stderr)
        return 1

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
