from bridgind.api.query import open_pheasant_adapter, query_chains, resolve_block_range

__all__ = ["open_pheasant_adapter", "query_chains", "resolve_block_range"]
