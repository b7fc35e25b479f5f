"""
Payment Relay — Uvicorn Launcher
Run this file to start the server.

Usage:
    python run.py
    python run.py --port 3000
    python run.py --reload
"""
import argparse

import uvicorn

from payrelay.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Mobile Money Payment Relay Server")
    parser.add_argument("--host", default=settings.HOST, help=f"Bind host (default: {settings.HOST})")
    parser.add_argument("--port", type=int, default=settings.PORT, help=f"Bind port (default: {settings.PORT})")
    parser.add_argument("--reload", action="store_true", help="Enable hot reload for development")
    parser.add_argument("--workers", type=int, default=1, help="Number of workers (default: 1)")

    args = parser.parse_args()

    print(f"""
    ========================================================
      Payment Relay -- Server
      API:     http://{args.host}:{args.port}
      Health:  http://localhost:{args.port}/health
      Docs:    http://localhost:{args.port}/docs
    ========================================================
    """)

    uvicorn.run(
        "payrelay.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
