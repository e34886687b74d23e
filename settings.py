"""
Application settings for the Menu Editor service.

Configuration is read from environment variables; the shared ``logger`` is
imported by every module that needs to log.
"""

import logging
import os

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./menu_editor.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Defaults applied to items created from the editor
NEW_MENU_TITLE = os.getenv("NEW_MENU_TITLE", "Item Menu Baru")
NEW_SUBMENU_TITLE = os.getenv("NEW_SUBMENU_TITLE", "Submenu Baru")
NEW_MENU_ICON = os.getenv("NEW_MENU_ICON", "📱")
NEW_MENU_TEXT_SIZE = 11.0
NEW_MENU_ROUTE = "/product"
NEW_MENU_ROUTE_ARGS = {
    "operators": ["TSELREG"],
    "hintText": "Nomor HP Pelanggan",
}

# Editor sessions untouched for longer than this are dropped
EDITOR_SESSION_IDLE_SECONDS = int(os.getenv("EDITOR_SESSION_IDLE_SECONDS", "3600"))

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

logger = logging.getLogger("menu_editor")
