from bridgind.core.use_cases.normalize import NormalizationEngine, NormalizeStats, normalize_log

__all__ = ["NormalizationEngine", "NormalizeStats", "normalize_log"]
