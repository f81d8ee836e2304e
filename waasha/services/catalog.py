from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from waasha.models.provider import BusinessCategory


@dataclass(frozen=True)
class CatalogService:
    id: str
    name: str
    category: BusinessCategory


@dataclass(frozen=True)
class ServiceCatalog:
    """
    Services a provider can offer, keyed by identifier.

    The category of an identifier missing from ``categories`` falls back to
    ``default_category``; the taxonomy is deliberately coarse and most
    personal-care services land in Hair.
    """

    services: Tuple[Tuple[str, str], ...]
    categories: Dict[str, BusinessCategory] = field(default_factory=dict)
    default_category: BusinessCategory = BusinessCategory.HAIR

    def __contains__(self, service_id: str) -> bool:
        return any(sid == service_id for sid, _ in self.services)

    def category_for(self, service_id: str) -> BusinessCategory:
        return self.categories.get(service_id, self.default_category)

    def unknown(self, service_ids: Iterable[str]) -> List[str]:
        return [sid for sid in service_ids if sid not in self]

    def entries(self) -> List[CatalogService]:
        return [CatalogService(sid, name, self.category_for(sid)) for sid, name in self.services]


DEFAULT_CATALOG = ServiceCatalog(
    services=(
        ("hair", "Hair Service"),
        ("nails", "Nails"),
        ("facials", "Facials"),
        ("massages", "Massages"),
        ("makeup", "Makeup"),
        ("carwash", "Carwash"),
        ("training", "Training"),
    ),
    categories={
        "hair": BusinessCategory.HAIR,
        "carwash": BusinessCategory.CARWASH,
        "training": BusinessCategory.TRAINING,
    },
)
