from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

ENV_PREFIX = "BRIDGIND_"


@dataclass(frozen=True)
class RpcConfig:
    """Connection settings for one chain's JSON-RPC endpoint."""

    url: str
    timeout_s: int = 20
    max_connections: int = 64


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for the normalization engine."""

    concurrency: int = 8
    step: int = 0  # blocks per eth_getLogs call; 0 = whole range at once

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        if self.step < 0:
            raise ValueError("step must be >= 0")


@dataclass(frozen=True)
class AdapterConfig:
    """Configuration for a wired bridge adapter (source label, RPCs, engine)."""

    source_name: str = "pheasant-network"
    rpc: Mapping[str, RpcConfig] = field(default_factory=dict)
    engine: EngineConfig = field(default_factory=EngineConfig)

    @classmethod
    def from_env(
        cls,
        chains: Iterable[str],
        *,
        source_name: str = "pheasant-network",
        environ: Mapping[str, str] | None = None,
    ) -> AdapterConfig:
        """Build a config from `BRIDGIND_*` environment variables.

        `BRIDGIND_RPC_URL_<CHAIN>` selects the endpoint of each chain; chains
        without one are left out.
        """
        env = os.environ if environ is None else environ
        timeout_s = int(env.get(f"{ENV_PREFIX}RPC_TIMEOUT_S", 20))
        rpc: dict[str, RpcConfig] = {}
        for chain in chains:
            url = env.get(f"{ENV_PREFIX}RPC_URL_{chain.upper()}")
            if url:
                rpc[chain] = RpcConfig(url=url, timeout_s=timeout_s)
        engine = EngineConfig(
            concurrency=int(env.get(f"{ENV_PREFIX}ENGINE_CONCURRENCY", 8)),
            step=int(env.get(f"{ENV_PREFIX}ENGINE_STEP", 0)),
        )
        return cls(source_name=source_name, rpc=rpc, engine=engine)
