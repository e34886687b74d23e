from pydantic import BaseModel, Field
from datetime import datetime
from typing import List
from models.menu import MenuEntry


class CreateMenuRequest(BaseModel):
    """Schema for creating a new menu."""
    name: str = Field(..., description="Display name for the menu")
    items: List[MenuEntry] = Field(default_factory=list, description="Nested menu entries")


class UpdateMenuItemsRequest(BaseModel):
    """Schema for replacing the entries of a menu."""
    items: List[MenuEntry] = Field(..., description="Nested menu entries")


class MenuResponse(BaseModel):
    """Schema for menu responses."""
    id: str = Field(..., description="Menu ID")
    name: str = Field(..., description="Display name for the menu")
    items: List[MenuEntry] = Field(..., description="Nested menu entries")
    updated_at: datetime = Field(..., description="Last time the entries were stored")

    model_config = {"from_attributes": True}


class MenuListResponse(BaseModel):
    """Schema for menu list responses."""
    menus: List[MenuResponse]
    total_count: int


class MessageResponse(BaseModel):
    """Generic confirmation message."""
    message: str
