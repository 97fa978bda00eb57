from typing import Any, Dict, List, Optional

from library_transfer.config import DEFAULT_PAGE_SIZE
from library_transfer.core import RemoteApiError, get_logger

from .http import api_request, extract_error_message, json_object

logger = get_logger("pagination")


def with_page_size(url: str, page_size: int) -> str:
    """Append the `limit` query parameter, respecting an existing query string."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}limit={page_size}"


def fetch_all_pages(
    base_url: str,
    access_token: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    container: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Fetch every item of a paginated collection by following `next` links.

    Pages are requested strictly one after the other, since each page's URL
    comes from the previous response. Items keep the server's order.

    `container` names the key wrapping the page object for endpoints such as
    /me/following, which answer {"artists": {"items": [...], "next": ...}}.
    """
    items: List[Dict[str, Any]] = []
    next_url: Optional[str] = with_page_size(base_url, page_size)
    page = 0

    while next_url:
        page += 1
        r = api_request("GET", next_url, access_token)
        if not r.ok:
            raise RemoteApiError(
                extract_error_message(r, "Failed to fetch data"),
                status_code=r.status_code,
            )

        data = json_object(r)
        if container:
            data = data.get(container) or {}
        if not isinstance(data, dict):
            raise RemoteApiError(
                f"Unexpected page shape from {next_url}", status_code=r.status_code
            )

        page_items = data.get("items") or []
        if not isinstance(page_items, list):
            raise RemoteApiError(
                f"Unexpected page items from {next_url}", status_code=r.status_code
            )
        # Entries that are not objects carry nothing to project or copy.
        items.extend(item for item in page_items if isinstance(item, dict))
        next_url = data.get("next")

        logger.debug(
            "Fetched page %d of %s (%d items, %d total)",
            page,
            base_url,
            len(page_items),
            len(items),
        )

    return items
