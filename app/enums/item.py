from enum import Enum


class ItemCategory(str, Enum):
    """Categorías del catálogo"""

    OUTILS = "outils"
    HIGH_TECH = "high-tech"
    LOISIRS = "loisirs"
    MAISON = "maison"
    SPORT = "sport"
    VEHICULES = "vehicules"
    AUTRES = "autres"


class ItemCondition(str, Enum):
    NEUF = "neuf"
    TRES_BON_ETAT = "tres-bon-etat"
    BON_ETAT = "bon-etat"
    ETAT_CORRECT = "etat-correct"


class ItemStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    RENTED = "rented"


class ItemSort(str, Enum):
    NEWEST = "newest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    POPULAR = "popular"
