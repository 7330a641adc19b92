#!/usr/bin/env python3
"""
re-imagined.me API - development launcher

Starts the FastAPI backend under uvicorn.

Usage:
    python run.py                    # localhost:8000 with auto-reload
    python run.py --host 0.0.0.0     # Network accessible
    python run.py --port 9000        # Custom port
    python run.py --no-reload        # Production-like single process

Environment Variables:
    - OPENAI_API_KEY: Required for snapshot generation (warning only)
    - DEV_MODE: "false" switches logging to JSON lines and hides /docs
"""

import argparse
import os
import sys
from pathlib import Path

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8000
BACKEND_DIR = Path(__file__).resolve().parent / "backend"


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the re-imagined.me API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--host',
        type=str,
        default=DEFAULT_HOST,
        help=f'Host to bind to (default: {DEFAULT_HOST}). Use 0.0.0.0 for network access'
    )
    parser.add_argument(
        '--port',
        type=int,
        default=DEFAULT_PORT,
        help=f'Port to listen on (default: {DEFAULT_PORT})'
    )
    parser.add_argument(
        '--no-reload',
        action='store_true',
        help='Disable auto-reload on code changes'
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    import uvicorn

    if not os.environ.get("OPENAI_API_KEY"):
        print("Warning: OPENAI_API_KEY is not set; snapshot requests will fail with 500.")

    uvicorn.run(
        "reimagined.main:app",
        host=args.host,
        port=args.port,
        reload=not args.no_reload,
        app_dir=str(BACKEND_DIR),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
