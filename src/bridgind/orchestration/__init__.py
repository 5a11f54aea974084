from bridgind.orchestration.utils import iter_chunks

__all__ = ["iter_chunks"]
