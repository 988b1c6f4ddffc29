"""Protean Engine runner for the inventory domain.

Only needed when event processing is async (the production overlay): the
Engine then delivers product events to the stock alert evaluator.

Usage:
    python src/server.py
"""

import asyncio

from protean.server.engine import Engine


async def run():
    from inventory.domain import inventory

    inventory.init()
    await Engine(inventory).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
