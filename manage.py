#!/usr/bin/env python3
"""
Management commands for the Menu Editor.

Usage:
    python manage.py init_db
    python manage.py check_db
    python manage.py reset_db
    python manage.py import_menu <name> <json_file>
    python manage.py export_menu <menu_id>
"""

import sys
import json
from sqlmodel import SQLModel, select, text
from database import engine, get_session
from settings import logger
from models.menu import MenuDocument, MenuEntry
from editor.builder import normalize_entries


def init_db():
    """Initialize database tables."""
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created successfully")


def check_db():
    """Check database connection and tables."""
    try:
        with next(get_session()) as session:
            result = session.exec(text("SELECT name FROM sqlite_master WHERE type='table'"))
            tables = result.fetchall()
            logger.info(f"Database connected. Found {len(tables)} tables: {[t[0] for t in tables]}")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        sys.exit(1)


def reset_db():
    """Drop and recreate all database tables."""
    logger.warning("Dropping all database tables...")
    SQLModel.metadata.drop_all(engine)
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database reset successfully")


def import_menu(name: str, json_file: str):
    """Store a menu from a JSON file holding a list of entries."""
    try:
        with open(json_file, encoding="utf-8") as handle:
            raw_items = json.load(handle)

        items = normalize_entries([MenuEntry.model_validate(item) for item in raw_items])

        with next(get_session()) as session:
            menu = MenuDocument(
                name=name,
                items=[item.model_dump(mode="json", exclude_none=True) for item in items]
            )
            session.add(menu)
            session.commit()
            session.refresh(menu)

            logger.info(f"Menu '{name}' imported successfully with ID: {menu.id}")
    except Exception as e:
        logger.error(f"Failed to import menu: {e}")
        sys.exit(1)


def export_menu(menu_id: str):
    """Print the stored entries of a menu as JSON."""
    with next(get_session()) as session:
        menu = session.exec(select(MenuDocument).where(MenuDocument.id == menu_id)).first()

    if not menu:
        logger.error(f"Menu not found: {menu_id}")
        sys.exit(1)

    print(json.dumps(menu.items, indent=2, ensure_ascii=False))


def main():
    if len(sys.argv) < 2:
        print("Usage: python manage.py <command> [args]")
        print("Commands:")
        print("  init_db                        - Initialize database tables")
        print("  check_db                       - Check database connection")
        print("  reset_db                       - Drop and recreate all tables")
        print("  import_menu <name> <json_file> - Store a menu from a JSON file")
        print("  export_menu <menu_id>          - Print a stored menu as JSON")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init_db":
        init_db()
    elif command == "check_db":
        check_db()
    elif command == "reset_db":
        reset_db()
    elif command == "import_menu":
        if len(sys.argv) != 4:
            print("Usage: python manage.py import_menu <name> <json_file>")
            sys.exit(1)
        import_menu(sys.argv[2], sys.argv[3])
    elif command == "export_menu":
        if len(sys.argv) != 3:
            print("Usage: python manage.py export_menu <menu_id>")
            sys.exit(1)
        export_menu(sys.argv[2])
    else:
        print(f"Unknown command: {command}")
        print("Run 'python manage.py' to see available commands")
        sys.exit(1)


if __name__ == "__main__":
    main()
