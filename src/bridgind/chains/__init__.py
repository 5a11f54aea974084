from bridgind.chains.registry import ChainRegistry

__all__ = ["ChainRegistry"]
