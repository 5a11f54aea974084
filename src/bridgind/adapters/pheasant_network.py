"""Pheasant Network: bridge and swap-router event specifications.

Contract families:
- `bridge`: `NewTrade` (deposit) / `Accept` (withdraw)
- `cctp`: CCTP bridge addresses; tracked in the registry, no event specs yet
- `swap`: `SwapNewTrade` (deposit) / `SwapWithdrawTrade` (withdraw)
"""

from __future__ import annotations

from bridgind.adapters.base import BridgeAdapter, FamilyBuilders, build_adapter, compose_specs
from bridgind.chains.registry import ChainRegistry
from bridgind.core.interfaces import INormalizationEngine
from bridgind.core.models import Direction
from bridgind.decoding.specs import EventSpecification

SOURCE_NAME = "pheasant-network"

BRIDGE = "bridge"
CCTP = "cctp"
SWAP = "swap"

BRIDGE_ADDRESSES: dict[str, str] = {
    "optimism": "0x6Aca7B9a3700B19CB5909208704A4e71B30e7840",
    "arbitrum": "0x3B5357D73fC65487449Cd68550adB9F46A0b8068",
    "scroll": "0x4e44f012B66C839A9904d128B93F80Dd5e3a1b21",
    "base": "0xDce25728E076ee5BCD146fD9F5FB5360ad18bCa0",
    "linea": "0x505cf4BB10bD1320f2F07d445bBe06A721B6CF53",
    "taiko": "0x04e28F7244980d3280F3b485D9cDA4b58F6C99B5",
    "morph": "0xbD45fC4826Fd0981F1A3d8330cf75309fBC9ce33",
}

CCTP_BRIDGE_ADDRESSES: dict[str, str] = {
    "ethereum": "0x847885c4a883A42dbC58c9f318df3106306c2467",
    "optimism": "0x9dD4a939D6646028d3a35Eb45737f18Ee047D480",
    "arbitrum": "0x268d153690F07E46dFbfC57cB74d5fb6BF5994fA",
    "base": "0xA3ed5F8D0Df3C1225E084ce6879DFBFE91Ae567d",
}

SWAP_ADDRESSES: dict[str, str] = {
    "arbitrum": "0xfC9C6B6e0D02EaDE37aC8b6c59e7181726075696",
    "taiko": "0xfC9C6B6e0D02EaDE37aC8b6c59e7181726075696",
}

PHEASANT_REGISTRY = ChainRegistry(
    {
        BRIDGE: BRIDGE_ADDRESSES,
        CCTP: CCTP_BRIDGE_ADDRESSES,
        SWAP: SWAP_ADDRESSES,
    }
)

SUPPORTED_CHAINS: tuple[str, ...] = ("optimism", "arbitrum", "scroll", "base", "linea", "taiko", "morph")


# -------------------------
# Bridge family
# -------------------------

def bridge_deposit_spec(chain: str, registry: ChainRegistry = PHEASANT_REGISTRY) -> EventSpecification:
    return EventSpecification(
        target=registry.address(BRIDGE, chain),
        event_signature="NewTrade(address,uint256,address,uint256,address)",
        abi=("event NewTrade(address indexed userAddress, uint256 index, address to, uint256 amount, address token)",),
        direction=Direction.DEPOSIT,
        arg_keys={
            "token": "token",
            "from": "userAddress",
            "to": "to",
            "amount": "amount",
        },
        family=BRIDGE,
    )


def bridge_withdraw_spec(chain: str, registry: ChainRegistry = PHEASANT_REGISTRY) -> EventSpecification:
    return EventSpecification(
        target=registry.address(BRIDGE, chain),
        # follows the ABI below; dropping bytes32 txHash changes topic0
        event_signature="Accept(address,bytes32,uint256,address,uint256,address)",
        abi=(
            "event Accept(address indexed userAddress, bytes32 indexed txHash, uint256 index, address to, uint256 amount, address token)",
        ),
        direction=Direction.WITHDRAW,
        arg_keys={
            "token": "token",
            "from": "userAddress",
            "to": "to",
            "amount": "amount",
        },
        family=BRIDGE,
    )


# -------------------------
# Swap-router family
# -------------------------

def swap_deposit_spec(chain: str, registry: ChainRegistry = PHEASANT_REGISTRY) -> EventSpecification:
    return EventSpecification(
        target=registry.address(SWAP, chain),
        event_signature="SwapNewTrade(address,address,(string,uint16,address,address,uint256,uint256,uint256))",
        abi=(
            "event SwapNewTrade(address indexed userAddress, address indexed token, "
            "tuple(string toChainId, uint16 swapToolIndex, address toolContract, address toToken, "
            "uint256 amount, uint256 relayerFee, uint256 timestamp) trade)",
        ),
        direction=Direction.DEPOSIT,
        arg_keys={
            "token": "token",
            "from": "userAddress",
            "to": "trade.toolContract",
            "amount": "trade.amount",
        },
        family=SWAP,
    )


def swap_withdraw_spec(chain: str, registry: ChainRegistry = PHEASANT_REGISTRY) -> EventSpecification:
    """Withdraw leg of the swap router.

    `SwapWithdrawTrade` carries no sender argument: the router contract is
    assumed to be the nominal sender, so `from` is fixed to its address. If
    the event ever gains a sender argument this spec must map it instead.
    """
    swap_address = registry.address(SWAP, chain)
    return EventSpecification(
        target=swap_address,
        event_signature="SwapWithdrawTrade(address,address,bytes32,uint256,bytes)",
        abi=(
            "event SwapWithdrawTrade(address indexed userAddress, address indexed token, bytes32 tradeHash, uint256 amount, bytes data)",
        ),
        direction=Direction.WITHDRAW,
        arg_keys={
            "token": "token",
            "to": "userAddress",
            "amount": "amount",
        },
        fixed_values={"from": swap_address},
        family=SWAP,
    )


PHEASANT_BUILDERS: FamilyBuilders = {
    BRIDGE: (bridge_deposit_spec, bridge_withdraw_spec),
    SWAP: (swap_deposit_spec, swap_withdraw_spec),
}


def compose_pheasant_specs(
    chain: str,
    registry: ChainRegistry = PHEASANT_REGISTRY,
) -> tuple[EventSpecification, ...]:
    """Event specifications for `chain` (empty if it has no tracked contracts)."""
    return compose_specs(chain, registry, PHEASANT_BUILDERS)


def build_pheasant_adapter(
    engine: INormalizationEngine,
    chains: tuple[str, ...] = SUPPORTED_CHAINS,
) -> BridgeAdapter:
    """Build the `{chain: query}` map for the supported chains."""
    return build_adapter(SOURCE_NAME, chains, engine, compose_pheasant_specs)
