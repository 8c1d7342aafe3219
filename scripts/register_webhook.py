#!/usr/bin/env python3
"""
Register the POI claim webhook with CFTools Hephaistos.

Uses CFTOOLS_* and CF_WEBHOOK_SECRET from the environment / .env.

Usage:
    python scripts/register_webhook.py --url https://claims.example.com/webhook
    python scripts/register_webhook.py --info
"""

import argparse
import asyncio
import json
import sys

from poiclaim.config import settings
from poiclaim.gameserver import CFToolsClient, CFToolsError


async def main() -> int:
    parser = argparse.ArgumentParser(description="Register the CFTools chat webhook")
    parser.add_argument("--url", help="Public webhook URL (defaults to CFTOOLS_WEBHOOK_URL)")
    parser.add_argument("--info", action="store_true", help="Only print server info")
    args = parser.parse_args()

    if not settings.cftools_configured:
        print("CFTools credentials missing: set CFTOOLS_APPLICATION_ID, "
              "CFTOOLS_APPLICATION_SECRET and CFTOOLS_SERVER_API_ID", file=sys.stderr)
        return 1

    client = CFToolsClient()
    try:
        if args.info:
            info = await client.get_server_info()
            print(json.dumps(info, indent=2))
            return 0

        url = args.url or settings.cftools_webhook_url
        if not url:
            print("No webhook URL: pass --url or set CFTOOLS_WEBHOOK_URL", file=sys.stderr)
            return 1
        if not settings.cf_webhook_secret:
            print("CF_WEBHOOK_SECRET must be set before registering a webhook", file=sys.stderr)
            return 1

        result = await client.register_webhook(url, settings.cf_webhook_secret)
        print(json.dumps(result, indent=2))
        return 0
    except CFToolsError as e:
        print(f"CFTools error: {e}", file=sys.stderr)
        return 1
    finally:
        await client.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
