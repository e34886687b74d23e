from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select
from datetime import datetime, timezone
from typing import List
from database import get_session
from models.menu import MenuDocument, MenuEntry
from editor.builder import normalize_entries
from settings import logger
from .schemas.menu import (
    CreateMenuRequest,
    UpdateMenuItemsRequest,
    MenuResponse,
    MenuListResponse,
    MessageResponse,
)

router = APIRouter(prefix="/menus", tags=["menus"])


def get_menu_or_404(menu_id: str, db_session: Session) -> MenuDocument:
    """Fetch a stored menu or raise 404."""
    menu_statement = select(MenuDocument).where(MenuDocument.id == menu_id)
    menu = db_session.exec(menu_statement).first()

    if not menu:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Menu not found"
        )

    return menu


def store_items(menu: MenuDocument, items: List[MenuEntry], db_session: Session) -> MenuDocument:
    """Replace the stored entries of a menu and commit."""
    menu.items = [item.model_dump(mode="json", exclude_none=True) for item in items]
    menu.updated_at = datetime.now(timezone.utc)

    db_session.add(menu)
    db_session.commit()
    db_session.refresh(menu)

    logger.info("Menu entries stored", extra={
        "menu_id": menu.id,
        "root_items": len(menu.items)
    })
    return menu


@router.get("")
async def list_menus(
    db_session: Session = Depends(get_session)
) -> MenuListResponse:
    """List all stored menus."""

    statement = select(MenuDocument)
    menus = db_session.exec(statement).all()

    return MenuListResponse(
        menus=[MenuResponse.model_validate(menu) for menu in menus],
        total_count=len(menus)
    )


@router.post("")
async def create_menu(
    menu_data: CreateMenuRequest,
    db_session: Session = Depends(get_session)
) -> MenuResponse:
    """Create a new menu; entries without an id get one from their title."""

    new_menu = MenuDocument(name=menu_data.name)
    new_menu = store_items(new_menu, normalize_entries(menu_data.items), db_session)

    return MenuResponse.model_validate(new_menu)


@router.get("/{menu_id}")
async def get_menu(
    menu_id: str,
    db_session: Session = Depends(get_session)
) -> MenuResponse:
    """Get a specific menu."""

    menu = get_menu_or_404(menu_id, db_session)

    return MenuResponse.model_validate(menu)


@router.put("/{menu_id}/items")
async def update_menu_items(
    menu_id: str,
    menu_data: UpdateMenuItemsRequest,
    db_session: Session = Depends(get_session)
) -> MenuResponse:
    """Replace the entries of a menu."""

    menu = get_menu_or_404(menu_id, db_session)
    menu = store_items(menu, normalize_entries(menu_data.items), db_session)

    return MenuResponse.model_validate(menu)


@router.delete("/{menu_id}")
async def delete_menu(
    menu_id: str,
    db_session: Session = Depends(get_session)
) -> MessageResponse:
    """Delete a menu."""

    menu = get_menu_or_404(menu_id, db_session)

    db_session.delete(menu)
    db_session.commit()

    return MessageResponse(message="Menu deleted successfully")
