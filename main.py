#!/usr/bin/env python3
"""
Steam Inventory Viewer - entry point.
Runs the web server; configuration comes from the environment (and `.env`, if present).
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", stream=sys.stderr
)


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Sign in with Steam and browse your inventory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  SESSION_SECRET   session signing key (required to sign in)
  STEAM_API_KEY    Steam Web API key (profile lookup)
  APP_URL          public base URL (default: http://localhost:3000)
  APP_ENV          production|development (default: development)
  PORT             listen port (default: 3000)

Examples:
  python main.py
  python main.py --port 8080
        """,
    )
    parser.add_argument("--host", default=None, help="Bind host (default: $HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Listen port (default: $PORT or 3000)")
    parser.add_argument("--env-file", default=".env", help="Dotenv file to load before reading config (default: .env)")

    args = parser.parse_args()

    load_dotenv(args.env_file)

    from steamview.api.server import run

    try:
        run(host=args.host, port=args.port)
    except Exception as e:
        print(f"Error starting server: {e}", file=sys.stderr)
        raise


if __name__ == "__main__":
    main()
