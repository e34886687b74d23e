from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from editor.tree import MovePosition, NodeKind, TreeNode


class OpenEditorRequest(BaseModel):
    """Schema for opening an editing session on a stored menu."""
    menu_id: str = Field(..., description="Menu to edit")


class AddItemRequest(BaseModel):
    """Schema for adding an item or submenu."""
    kind: NodeKind = Field(NodeKind.MENU, description="menu (item) or submenu (branch)")
    parent_id: Optional[str] = Field(None, description="Branch node to add into; root when omitted")


class UpdateItemRequest(BaseModel):
    """Schema for updating an item's payload."""
    changes: Dict[str, Any] = Field(..., description="Fields merged into the item")


class MoveItemRequest(BaseModel):
    """Schema for a drag-and-drop move."""
    target_id: str = Field(..., description="Node the item is dropped on")
    position: MovePosition = Field(..., description="before, after or inside the target")


class EditorStateResponse(BaseModel):
    """Schema for the current state of an editing session."""
    session_id: str
    menu_id: Optional[str] = None
    tree: List[TreeNode]
    has_unsaved_changes: bool


class EditResultResponse(BaseModel):
    """Schema for the outcome of an edit."""
    success: bool
    message: str
    changed: bool
    has_unsaved_changes: bool
    node_id: Optional[str] = None
    tree: List[TreeNode]
