"""
Example of relaying a tweet's photos without running the HTTP service.
"""

import asyncio
import sys
from tweet_gyazo.config import get_settings
from tweet_gyazo.core.errors import RelayError
from tweet_gyazo.core.relay import relay_status

async def main(link: str):
    # Credentials come from the environment or .env
    settings = get_settings()

    try:
        result = await relay_status(link, settings)
        print(f"\nStatus {result.status_id}: {len(result.uploads)} images uploaded")
        for upload in result.uploads:
            print(f"- {upload.permalink_url}")
    except RelayError as e:
        print(f"Error: {str(e)}")
        sys.exit(1)

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python examples/relay_example.py LINK_TO_TWEET")
        sys.exit(2)
    asyncio.run(main(sys.argv[1]))
