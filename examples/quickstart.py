# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Quickstart: create, read, update and delete a contact through the Web API.

Usage::

    python examples/quickstart.py https://contoso.powerappsportals.com/_services/about
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from dataverse_pages import ApiError, QueryOptions, WebApiClient, WebApiConfig


async def main(page_url: str) -> None:
    config = WebApiConfig.from_page_url(page_url)
    print({"api_url": config.api_url})

    async with WebApiClient(config) as client:
        contact_id = await client.create("contact", {"firstname": "Jane", "lastname": "Sample"})
        print({"created": contact_id})

        record = await client.retrieve("contact", contact_id, QueryOptions(select=["fullname"]))
        print({"retrieved": record.get("fullname")})

        await client.update("contact", contact_id, {"jobtitle": "Tester"})

        rows = await client.retrieve_multiple(
            "contact",
            QueryOptions(select=["fullname", "jobtitle"], filter="lastname eq 'Sample'", top=5),
        )
        print({"matching": len(rows)})

        try:
            await client.retrieve_multiple("contact", {"filter": "not a filter"})
        except ApiError as ex:
            print({"expected_error": ex.message, "status": ex.status_code})

        await client.delete("contact", contact_id)
        print({"deleted": contact_id})


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: quickstart.py <page url>")
        sys.exit(1)
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main(sys.argv[1]))
