from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session
from database import get_session
from editor.manager import sessions
from editor.session import EditorSession, EditResult
from .menu import get_menu_or_404, store_items
from .schemas.menu import MessageResponse
from .schemas.editor import (
    OpenEditorRequest,
    AddItemRequest,
    UpdateItemRequest,
    MoveItemRequest,
    EditorStateResponse,
    EditResultResponse,
)

router = APIRouter(prefix="/editor", tags=["editor"])


def get_editor_or_404(session_id: str) -> EditorSession:
    """Fetch an open editing session or raise 404."""
    editor = sessions.get(session_id)

    if not editor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Editor session not found"
        )

    return editor


def editor_state(editor: EditorSession) -> EditorStateResponse:
    return EditorStateResponse(
        session_id=editor.id,
        menu_id=editor.menu_id,
        tree=editor.tree,
        has_unsaved_changes=editor.has_unsaved_changes
    )


def edit_response(editor: EditorSession, result: EditResult) -> EditResultResponse:
    """Map an edit outcome to a response; refused edits become 422."""
    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=result.message
        )

    return EditResultResponse(
        success=result.success,
        message=result.message,
        changed=result.changed,
        has_unsaved_changes=result.has_unsaved_changes,
        node_id=result.node_id,
        tree=editor.tree
    )


@router.post("")
async def open_editor(
    editor_data: OpenEditorRequest,
    db_session: Session = Depends(get_session)
) -> EditorStateResponse:
    """Open an editing session on a stored menu."""

    menu = get_menu_or_404(editor_data.menu_id, db_session)
    editor = sessions.open(menu.entries(), menu_id=menu.id)

    return editor_state(editor)


@router.get("/{session_id}")
async def get_editor(session_id: str) -> EditorStateResponse:
    """Get the current tree of an editing session."""

    editor = get_editor_or_404(session_id)

    return editor_state(editor)


@router.post("/{session_id}/items")
async def add_item(session_id: str, item_data: AddItemRequest) -> EditResultResponse:
    """Add an item or submenu at the root or into a submenu."""

    editor = get_editor_or_404(session_id)
    result = editor.add_item(item_data.kind, parent_id=item_data.parent_id)

    return edit_response(editor, result)


@router.patch("/{session_id}/items/{node_id}")
async def update_item(session_id: str, node_id: str, item_data: UpdateItemRequest) -> EditResultResponse:
    """Merge changes into an item."""

    editor = get_editor_or_404(session_id)
    result = editor.update_item(node_id, item_data.changes)

    return edit_response(editor, result)


@router.delete("/{session_id}/items/{node_id}")
async def delete_item(session_id: str, node_id: str) -> EditResultResponse:
    """Delete an item and everything below it."""

    editor = get_editor_or_404(session_id)
    result = editor.delete_item(node_id)

    return edit_response(editor, result)


@router.post("/{session_id}/items/{node_id}/duplicate")
async def duplicate_item(session_id: str, node_id: str) -> EditResultResponse:
    """Duplicate an item and everything below it."""

    editor = get_editor_or_404(session_id)
    result = editor.duplicate_item(node_id)

    return edit_response(editor, result)


@router.post("/{session_id}/items/{node_id}/move")
async def move_item(session_id: str, node_id: str, move_data: MoveItemRequest) -> EditResultResponse:
    """Move an item before, after or inside another one."""

    editor = get_editor_or_404(session_id)
    result = editor.move_item(node_id, move_data.target_id, move_data.position)

    return edit_response(editor, result)


@router.post("/{session_id}/save")
async def save_editor(
    session_id: str,
    db_session: Session = Depends(get_session)
) -> EditorStateResponse:
    """Store the edited entries in the menu the session was opened on."""

    editor = get_editor_or_404(session_id)
    menu = get_menu_or_404(editor.menu_id, db_session)

    editor.save(lambda entries: store_items(menu, entries, db_session))

    return editor_state(editor)


@router.post("/{session_id}/revert")
async def revert_editor(session_id: str) -> EditorStateResponse:
    """Discard every edit since the last load or save."""

    editor = get_editor_or_404(session_id)
    editor.revert()

    return editor_state(editor)


@router.delete("/{session_id}")
async def close_editor(session_id: str) -> MessageResponse:
    """Close an editing session without saving."""

    if not sessions.close(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Editor session not found"
        )

    return MessageResponse(message="Editor session closed")
