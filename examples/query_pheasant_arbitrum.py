import asyncio
import logging

from bridgind.api.query import open_pheasant_adapter, query_chains, resolve_block_range
from bridgind.clients.rpc import RPC
from bridgind.core.config import AdapterConfig, EngineConfig, RpcConfig

RPC_URL = "https://arbitrum-one-rpc.publicnode.com"

config = AdapterConfig(
    rpc={"arbitrum": RpcConfig(url=RPC_URL)},
    engine=EngineConfig(concurrency=4, step=10_000),
)


async def main():
    logging.basicConfig(level=logging.INFO)

    rpc = RPC(RPC_URL)
    try:
        _, end = await resolve_block_range(rpc, 0, "latest")
    finally:
        await rpc.aclose()
    start = end - 50_000

    async with open_pheasant_adapter(config) as adapter:
        results = await query_chains(adapter, start, end, chains=["arbitrum"])

    records = results["arbitrum"]
    print(f"{len(records)} transfers in blocks {start}..{end}")
    for record in records[:10]:
        print(record.as_dict())


if __name__ == "__main__":
    asyncio.run(main())
