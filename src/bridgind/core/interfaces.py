from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, List, Protocol, runtime_checkable

from bridgind.core.models import EventLog, TransferRecord

if TYPE_CHECKING:
    from bridgind.decoding.specs import EventSpecification


# ---------------------------------------------------------------------------
# IEvmLogsProvider
# ---------------------------------------------------------------------------

@runtime_checkable
class IEvmLogsProvider(Protocol):
    """
    Abstract provider for fetching EVM logs of one chain.

    Domain expectations:
    - It returns EventLog objects already mapped into internal domain models.
    - Logs come back in ascending (block, log index) order.
    - It hides the underlying RPC / DB / archive technology.
    - Transport failures are raised, never swallowed or retried here.
    """

    async def get_logs(
        self,
        *,
        address: str,
        topic0s: Sequence[str],
        from_block: int,
        to_block: int,
    ) -> List[EventLog]:
        """
        Return all logs for (address, topic0s) over the inclusive block range.

        Implementations:
        - RPC-based (`bridgind.clients.rpc.RPC`)
        - In-memory or synthetic provider for testing
        """
        ...

    async def latest_block(self) -> int:
        """Return the current chain head height."""
        ...


# ---------------------------------------------------------------------------
# INormalizationEngine
# ---------------------------------------------------------------------------

@runtime_checkable
class INormalizationEngine(Protocol):
    """
    Turns event specifications plus a block range into transfer records.

    Domain expectations:
    - `source_name` is an opaque label used for logging only.
    - Records follow the order of `specs`, then the provider's log order.
    - Any decode or transport failure fails the whole call.
    """

    async def fetch_and_normalize(
        self,
        source_name: str,
        chain: str,
        from_block: int,
        to_block: int,
        specs: Sequence[EventSpecification],
    ) -> List[TransferRecord]:
        ...
