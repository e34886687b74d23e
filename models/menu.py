from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON
from pydantic import BaseModel, Field as PydanticField
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from .helper import id_generator


class SubmenuStyle(str, Enum):
    """How a submenu is presented on the device."""
    FULL_SCREEN = "fullScreen"
    BOTTOM_SHEET = "bottomSheet"


class SubmenuLayout(str, Enum):
    """How the items of a submenu are arranged."""
    GRID = "grid"
    LIST = "list"


class RouteTarget(BaseModel):
    """Navigation to an internal app route with typed arguments."""
    type: Literal["route"] = "route"
    route: str
    args: Dict[str, Any] = PydanticField(default_factory=dict)


class UrlTarget(BaseModel):
    """Navigation to an external URL."""
    type: Literal["url"] = "url"
    url: str


NavigationTarget = Annotated[Union[RouteTarget, UrlTarget], PydanticField(discriminator="type")]


class MenuEntry(BaseModel):
    """A menu leaf, or a branch when ``submenu`` is present.

    Unknown keys are kept so data written by other clients survives a
    load/save cycle. ``submenu_title``, ``submenu_style`` and ``submenu_layout``
    are legacy fields some stored menus carry at item level.
    """
    id: Optional[str] = None
    title: str = ""
    icon: str = ""
    text_size: Optional[float] = None
    text_color: Optional[str] = None
    navigation_target: Optional[NavigationTarget] = None
    submenu: Optional["SubmenuConfig"] = None
    submenu_title: Optional[str] = None
    submenu_style: Optional[SubmenuStyle] = None
    submenu_layout: Optional[SubmenuLayout] = None

    model_config = {"extra": "allow"}

    @property
    def is_branch(self) -> bool:
        return self.submenu is not None

    @property
    def has_legacy_submenu_fields(self) -> bool:
        return any(
            value is not None
            for value in (self.submenu_title, self.submenu_style, self.submenu_layout)
        )


class SubmenuConfig(BaseModel):
    """Submenu metadata plus the ordered child entries."""
    id: Optional[str] = None
    title: Optional[str] = None
    style: SubmenuStyle = SubmenuStyle.FULL_SCREEN
    layout: SubmenuLayout = SubmenuLayout.GRID
    items: List[MenuEntry] = PydanticField(default_factory=list)

    model_config = {"extra": "allow"}


MenuEntry.model_rebuild()


class MenuDocument(SQLModel, table=True):
    """Persisted menu structure for one in-app screen."""
    id: str = Field(default_factory=id_generator('menu', 10), primary_key=True)
    name: str = Field(description="Display name for the menu", index=True)
    items: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def entries(self) -> List[MenuEntry]:
        """Parse the stored items into ``MenuEntry`` objects."""
        return [MenuEntry.model_validate(item) for item in self.items or []]
