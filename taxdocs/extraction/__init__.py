from taxdocs.extraction.base import BaseExtractionProvider
from taxdocs.extraction.factory import ExtractionStrategyFactory
from taxdocs.extraction.field_normalizer import FieldNormalizer, MatchPolicy
from taxdocs.extraction.strategy import ExtractionStrategy

__all__ = [
    "BaseExtractionProvider",
    "ExtractionStrategy",
    "ExtractionStrategyFactory",
    "FieldNormalizer",
    "MatchPolicy",
]
