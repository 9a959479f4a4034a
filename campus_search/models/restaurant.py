"""Restaurant catalogue vocabulary shared with the campus backend."""

from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RestaurantType(str, Enum):
    """Category values stored on every restaurant."""
    
    CAMPUSFOOD = "campusfood"
    MAINFOOD = "mainfood"
    DRINKS = "drinks"
    NIGHTMARKET = "nightmarket"
    FRUIT = "fruit"
    DESSERT = "dessert"
    SNACKS = "snacks"
    LIFE = "life"
    ENTERTAINMENT = "entertainment"


RESTAURANT_TYPE_LABELS: Dict[RestaurantType, str] = {
    RestaurantType.CAMPUSFOOD: "校园食堂",
    RestaurantType.MAINFOOD: "主食",
    RestaurantType.DRINKS: "饮品店",
    RestaurantType.NIGHTMARKET: "夜市",
    RestaurantType.FRUIT: "水果",
    RestaurantType.DESSERT: "甜品",
    RestaurantType.SNACKS: "小吃",
    RestaurantType.LIFE: "生活",
    RestaurantType.ENTERTAINMENT: "娱乐",
}

ALL_CATEGORIES_LABEL = "全部"

# Types shown under each page of the campus app
SECTIONS: Dict[str, List[RestaurantType]] = {
    "food": [
        RestaurantType.CAMPUSFOOD,
        RestaurantType.MAINFOOD,
        RestaurantType.DRINKS,
        RestaurantType.NIGHTMARKET,
        RestaurantType.FRUIT,
        RestaurantType.DESSERT,
        RestaurantType.SNACKS,
    ],
    "life": [RestaurantType.LIFE],
}

_LABEL_TO_TYPE = {label: rtype.value for rtype, label in RESTAURANT_TYPE_LABELS.items()}


def resolve_category(category: Optional[str]) -> Optional[str]:
    """
    Resolve a category given as a type value or a display label.
    
    Args:
        category: Type value ("drinks"), display label ("饮品店"), "全部" or None
        
    Returns:
        The type value, or None when no single category is selected
    """
    if category is None:
        return None
    category = category.strip()
    if not category or category == ALL_CATEGORIES_LABEL:
        return None
    # Unknown values are passed through so new backend types still filter
    return _LABEL_TO_TYPE.get(category, category)


def allowed_types(
    category: Optional[str] = None,
    section: Optional[str] = None
) -> Optional[FrozenSet[str]]:
    """
    Compute the set of record types a search is restricted to.
    
    A selected category wins over the section scope. Returns None when
    nothing restricts the result.
    
    Raises:
        KeyError: If the section is not known
    """
    selected = resolve_category(category)
    if selected is not None:
        return frozenset([selected])
    if section:
        return frozenset(rtype.value for rtype in SECTIONS[section])
    return None


class Restaurant(BaseModel):
    """Full restaurant record as returned by the campus backend."""
    
    model_config = ConfigDict(populate_by_name=True, extra="allow")
    
    id: str
    name: str = ""
    type: str = ""
    address: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None
    cover: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    rating: Optional[float] = None
    open_time: Optional[str] = Field(default=None, alias="openTime")
    location_description: Optional[str] = Field(default=None, alias="locationDescription")
    menu_text: Optional[str] = Field(default=None, alias="menuText")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def none_to_list(cls, v):
        return [] if v is None else v
