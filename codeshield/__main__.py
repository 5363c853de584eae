"""
Code Shield CLI
"""
import argparse
import sys

import uvicorn

from codeshield.config.loader import get_settings


def main():
    """Main CLI entry point"""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Code Shield - AI-assisted code vulnerability review",
        epilog="Settings are read from CODESHIELD_* environment variables and the YAML config file.",
    )
    parser.add_argument("--host", default=settings.listen_host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.listen_port, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development)")
    args = parser.parse_args()

    uvicorn.run(
        "codeshield.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
