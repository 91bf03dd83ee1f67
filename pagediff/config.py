import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Configuration for the page comparison engine.
# Values can be overridden through the environment or a local .env file.
# No comparison logic here.

load_dotenv()

# Tree builder handed to BeautifulSoup
PARSER = os.getenv("PAGEDIFF_PARSER", "lxml")

# Id of the element hosting the comparison UI. Text inside it is never compared.
UI_CONTAINER_ID = os.getenv("PAGEDIFF_UI_CONTAINER_ID", "pce-ui-container")

# Logging
LOG_LEVEL = os.getenv("PAGEDIFF_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("PAGEDIFF_LOG_FILE") or None

# Network timeout for snapshot fetches (seconds)
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", 10))

# User-Agent string sent when fetching snapshots
USER_AGENT = os.getenv("USER_AGENT", "PageDiff/1.0")


@dataclass(frozen=True)
class DiffConfig:
    """Settings one ComparisonEngine works with."""
    parser: str = PARSER
    ui_container_id: str = UI_CONTAINER_ID
