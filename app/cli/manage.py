# app/cli/manage.py
import argparse
import asyncio
import logging
from logging.config import dictConfig

import uvicorn

from app.database import engine, init_db
from app.utils.logger import sample_logger

logger = logging.getLogger(__name__)


async def _init_db():
    try:
        await init_db()
    finally:
        await engine.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="User management API tools.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create database tables")

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="127.0.0.1", help="Bind host")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")
    serve.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    dictConfig(sample_logger)

    if args.command == "init-db":
        asyncio.run(_init_db())
        print("Database tables created.")
    elif args.command == "serve":
        uvicorn.run(
            "app.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_config=sample_logger,
        )


if __name__ == "__main__":
    main()
