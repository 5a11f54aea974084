from bridgind.clients.rpc import RPC

__all__ = ["RPC"]
