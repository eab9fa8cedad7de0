"""
Fixed category tables for incident severity, land-use safety and building usage.

Lookups resolve against enumerations declared here instead of dictionaries
assembled at runtime. Crime severity keeps the "first substring match wins,
otherwise weight 1" rule, so declaration order matters.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

DEFAULT_CRIME_WEIGHT = 1


class CrimeCategory(Enum):
    """Incident categories as (keywords, severity weight)."""
    BAG_SNATCHING = (("bag snatching", "ひったくり"), 5)
    ROBBERY = (("robbery", "強盗"), 6)
    STREET_ROBBERY = (("street robbery", "路上強盗"), 6)
    PICKPOCKETING = (("pickpocketing", "すり"), 4)
    ASSAULT = (("assault", "暴行"), 4)
    INJURY = (("injury", "傷害"), 4)
    SUSPICIOUS_PERSON = (("suspicious person", "不審者"), 2)
    ACCOSTING = (("accosting", "声かけ"), 2)
    BURGLARY = (("burglary", "侵入窃盗"), 5)
    BREAK_IN = (("house break-in", "空き巣"), 5)
    NIGHT_INTRUSION = (("night intrusion", "忍込み"), 5)
    VEHICLE_BREAK_IN = (("vehicle break-in", "車上ねらい"), 3)
    PARTS_THEFT = (("parts theft", "部品ねらい"), 3)
    CAR_THEFT = (("car theft", "自動車盗"), 4)
    MOTORCYCLE_THEFT = (("motorcycle theft", "オートバイ盗"), 3)
    BICYCLE_THEFT = (("bicycle theft", "自転車盗"), 1)
    VENDING_MACHINE_THEFT = (("vending machine theft", "自動販売機ねらい"), 2)
    SHOPLIFTING = (("shoplifting", "万引き"), 2)
    VANDALISM = (("vandalism", "器物損壊"), 2)

    @property
    def keywords(self) -> Tuple[str, ...]:
        return self.value[0]

    @property
    def weight(self) -> int:
        return self.value[1]

    def matches(self, crime_type: str) -> bool:
        lowered = crime_type.lower()
        return any(keyword in lowered for keyword in self.keywords)


def classify_crime(crime_type: Optional[str]) -> Optional[CrimeCategory]:
    """
    Find the first category whose keyword occurs in the incident description.

    Args:
        crime_type: Free-text incident type

    Returns:
        Matching CrimeCategory, or None when nothing matches
    """
    if not crime_type:
        return None

    for category in CrimeCategory:
        if category.matches(crime_type):
            return category

    return None


def crime_weight(crime_type: Optional[str]) -> int:
    """Severity weight for an incident type (first substring match, else 1)."""
    category = classify_crime(crime_type)
    return category.weight if category is not None else DEFAULT_CRIME_WEIGHT


class LandUseCode(Enum):
    """Land-use classification codes as (code, name, safety score)."""
    RICE_FIELD = ("201", "rice field", 0.2)
    FARMLAND = ("202", "farmland", 0.2)
    FOREST = ("203", "forest", 0.1)
    WATER = ("204", "water surface", 0.3)
    OTHER_NATURAL = ("205", "other natural land", 0.15)
    RESIDENTIAL = ("211", "residential", 0.6)
    COMMERCIAL = ("212", "commercial", 1.0)
    INDUSTRIAL = ("213", "industrial", 0.3)
    PUBLIC_FACILITY = ("214", "public facility", 0.8)
    ROAD = ("215", "road", 0.7)
    TRANSPORT_FACILITY = ("216", "transport facility", 0.5)
    PARK = ("217", "public open space (park)", 0.8)
    OTHER_PUBLIC = ("218", "other public facility", 0.5)
    AGRICULTURAL_FACILITY = ("219", "agricultural facility", 0.3)
    GOLF_COURSE = ("220", "golf course", 0.4)
    SOLAR_FARM = ("221", "solar farm", 0.2)
    SURFACE_PARKING = ("222", "surface parking", 0.3)
    OTHER_URBAN = ("223", "other urban land", 0.4)
    UNDERUSED = ("224", "underused land", 0.2)
    UNKNOWN = ("231", "unknown", 0.5)
    HABITABLE = ("251", "habitable land", 0.5)
    UNINHABITABLE = ("252", "uninhabitable land", 0.3)
    AGRICULTURAL = ("260", "agricultural land", 0.2)
    BUILDING_LAND = ("261", "building land", 0.6)
    ROAD_AND_RAIL = ("262", "road and railway", 0.7)
    VACANT = ("263", "vacant land", 0.3)

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @property
    def safety_score(self) -> float:
        return self.value[2]


_LAND_USE_BY_CODE: Dict[str, LandUseCode] = {member.code: member for member in LandUseCode}


def land_use_category(code: Optional[str]) -> LandUseCode:
    """Resolve a land-use code, falling back to UNKNOWN."""
    return _LAND_USE_BY_CODE.get(str(code) if code is not None else "", LandUseCode.UNKNOWN)


def land_use_safety(code: Optional[str]) -> float:
    """Safety score in [0, 1] for a land-use code."""
    return land_use_category(code).safety_score


class BuildingUsage(Enum):
    """Building usage codes as (code, name, display colour)."""
    OFFICE = ("401", "office", "#6366f1")
    COMMERCIAL = ("402", "commercial", "#f59e0b")
    ACCOMMODATION = ("403", "accommodation", "#ec4899")
    MIXED_COMMERCIAL = ("404", "mixed commercial", "#f97316")
    DETACHED_HOUSE = ("411", "detached house", "#94a3b8")
    APARTMENT = ("412", "apartment", "#64748b")
    SHOP_HOUSE = ("413", "shop house", "#a3a3a3")
    SHOP_APARTMENT = ("414", "shop apartment", "#737373")
    MEDICAL = ("421", "medical", "#ef4444")
    EDUCATION = ("422", "education", "#22c55e")
    LOGISTICS = ("431", "transport and warehouse", "#78716c")
    FACTORY = ("441", "factory", "#57534e")
    GOVERNMENT = ("451", "government", "#3b82f6")
    CULTURAL = ("452", "cultural", "#8b5cf6")
    GYMNASIUM = ("453", "gymnasium", "#14b8a6")
    AGRICULTURAL = ("461", "agricultural facility", "#84cc16")
    UTILITY = ("471", "utility plant", "#a8a29e")
    DEFENSE = ("472", "defense", "#44403c")
    OTHER = ("499", "other", "#9ca3af")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @property
    def color(self) -> str:
        return self.value[2]


_BUILDING_USAGE_BY_CODE: Dict[str, BuildingUsage] = {member.code: member for member in BuildingUsage}


def building_usage(code: Optional[str]) -> BuildingUsage:
    """Resolve a building usage code, falling back to OTHER."""
    return _BUILDING_USAGE_BY_CODE.get(str(code) if code is not None else "", BuildingUsage.OTHER)
