"""CLI demo that toggles tags on one host record.

Run with the virtual environment activated::

    python examples/demo_toggle_tags.py account 00000000-0000-0000-0000-000000000001 \
        new_account_tag new_tag new_name

Set ``NNTAGS_CLIENT_URL`` and ``NNTAGS_TOKEN`` for your organization.
"""

import asyncio
import logging
import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from nntags import ControlConfiguration, ToggleController, WebApi, resolve_context
from nntags.tools.tags import alert, choose_tag

logging.basicConfig(level=logging.INFO)


async def main(entity: str, entity_id: str, relationship: str, related: str, column: str) -> None:
    api = WebApi()
    context = await resolve_context(
        api,
        entity_logical_name=entity,
        entity_id=entity_id,
        relationship_name=relationship,
        related_logical_name=related,
    )

    # The demo reads candidate rows straight from the related entity set.
    payload = await asyncio.to_thread(
        api.request,
        "GET",
        f"/{context.related_set_name}",
        params={"$select": f"{context.related_id_field},{column}"},
    )
    records = payload.get("value", []) if isinstance(payload, dict) else []
    rows = [
        {
            "id": record.get(context.related_id_field),
            "cells": [{"columnName": column, "formattedValue": str(record.get(column) or "")}],
        }
        for record in records
    ]
    print(f"Fetched {len(rows)} candidate tags")

    configuration = ControlConfiguration.from_parameters(disable_searchbox="0", associated_hex="#2fa8ed")
    controller = ToggleController.from_api(api, context, configuration=configuration, notify=alert)
    await controller.refresh(rows, [column])

    while True:
        tag_id = await asyncio.to_thread(choose_tag, controller.tags, configuration)
        if tag_id is None:
            return
        await controller.toggle(tag_id)


if __name__ == "__main__":
    if len(sys.argv) != 6:
        print(__doc__)
        sys.exit(2)
    asyncio.run(main(*sys.argv[1:]))
