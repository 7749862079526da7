"""Abstract base class for résumé tailoring strategies."""

from abc import ABC, abstractmethod

from models.schemas.keyword_set import KeywordSet
from models.schemas.pipeline_result import TailorResult


class BaseTailoringStrategy(ABC):
    """Base class for the tailoring stage of the pipeline.

    Subclasses must implement:
        - strategy_name: identifier reported in TailorResult.strategy
        - tailor(resume_text, keywords): return a TailorResult
    """

    strategy_name: str = ""

    @abstractmethod
    def tailor(self, resume_text: str, keywords: KeywordSet) -> TailorResult:
        """Produce a tailored résumé for the given keyword set."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.strategy_name!r}>"
