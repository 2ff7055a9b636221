"""
Data model for the statistics and correlation engine.
Plain dataclasses - produced by ingestion, consumed read-only by analysis.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd


@dataclass(frozen=True)
class PriceSample:
    """Single observed price for an instrument."""
    price: float
    observed_at: datetime


@dataclass
class InstrumentSeries:
    """Ordered price samples for one instrument (oldest first)."""
    id: str
    samples: List[PriceSample] = field(default_factory=list)
    name: Optional[str] = None

    def prices(self) -> List[float]:
        """Price sequence with timestamps dropped, in sample order."""
        return [sample.price for sample in self.samples]

    def __len__(self) -> int:
        return len(self.samples)


@dataclass(frozen=True)
class InstrumentStats:
    """Descriptive statistics for one instrument."""
    id: str
    average: float
    std_dev: float


@dataclass
class CorrelationResult:
    """
    Output of the matrix builder.

    ``stats`` and ``matrix`` are positionally aligned with the instrument
    order given to the builder.
    """
    stats: List[InstrumentStats]
    matrix: List[List[float]]

    @property
    def ids(self) -> List[str]:
        return [s.id for s in self.stats]

    def correlation_between(self, id_a: str, id_b: str) -> float:
        """
        Look up a matrix cell by instrument id.

        Raises:
            KeyError: If either id is not part of the result
        """
        ids = self.ids
        try:
            i = ids.index(id_a)
            j = ids.index(id_b)
        except ValueError:
            raise KeyError(f"Unknown instrument: {id_a if id_a not in ids else id_b}")
        return self.matrix[i][j]

    def matrix_frame(self) -> pd.DataFrame:
        """Correlation matrix as a DataFrame labelled by instrument id."""
        ids = self.ids
        return pd.DataFrame(self.matrix, index=ids, columns=ids, dtype=float)

    def stats_frame(self) -> pd.DataFrame:
        """Statistics table as a DataFrame, one row per instrument."""
        return pd.DataFrame(
            [asdict(s) for s in self.stats],
            columns=['id', 'average', 'std_dev']
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        return {
            'stats': [asdict(s) for s in self.stats],
            'matrix': [list(row) for row in self.matrix]
        }
