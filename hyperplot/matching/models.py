"""Records exchanged with the matching engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class ParcelInput:
    """A parcel description extracted from text or form input.

    ``plot_area_sqm`` / ``gfa_sqm`` are the canonical values used for
    matching; they stay 0 when the dimension was not supplied or its unit
    was not recognised.
    """
    area: str = ""
    plot_area: float = 0.0
    plot_area_unit: str = "unknown"
    plot_area_sqm: float = 0.0
    gfa: float = 0.0
    gfa_unit: str = "unknown"
    gfa_sqm: float = 0.0
    zoning: str = ""
    use: str = ""
    height_floors: int = 0
    far: float = 0.0
    plot_number: Optional[str] = None

    @property
    def has_plot_area(self) -> bool:
        return self.plot_area_sqm > 0

    @property
    def has_gfa(self) -> bool:
        return self.gfa_sqm > 0

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class CatalogPlot:
    """A plot from the authoritative catalog. Areas are in sqm."""
    id: str
    area: float = 0.0
    gfa: float = 0.0
    zoning: str = ""
    floors: str = ""
    status: str = ""
    location: str = ""
    entity: str = ""
    project: str = ""
    developer: str = ""
    owner_name: str = ""
    contact: str = ""
    plot_coverage: Optional[float] = None
    is_frozen: bool = False
    construction_status: str = ""
    site_status: str = ""

    @property
    def labels(self) -> list[str]:
        """Names this plot can be referred to by (location, entity, project)."""
        return [label for label in (self.location, self.entity, self.project) if label]

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class MatchResult:
    input: ParcelInput
    matched_plot_id: str
    matched_plot_area: float
    matched_gfa: float
    matched_zoning: str
    matched_status: str
    matched_location: str
    area_deviation: float  # percent
    gfa_deviation: float   # percent
    confidence_score: int
    owner_reference: str = ""

    def to_dict(self) -> Dict:
        return {
            "input": self.input.to_dict(),
            "matched_plot_id": self.matched_plot_id,
            "matched_plot_area": self.matched_plot_area,
            "matched_gfa": self.matched_gfa,
            "matched_zoning": self.matched_zoning,
            "matched_status": self.matched_status,
            "matched_location": self.matched_location,
            "area_deviation": self.area_deviation,
            "gfa_deviation": self.gfa_deviation,
            "confidence_score": self.confidence_score,
            "owner_reference": self.owner_reference,
        }
