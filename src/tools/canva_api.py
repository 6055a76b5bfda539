"""
Canva Tools
===========

Tools for the Canva Connect REST API: listing, creating and exporting
designs, and managing folders.

These tools let the designer and the host runtime:
- Check the connection and the current user
- Find existing Bitcoin designs
- Create the daily education designs
- Export designs to PNG/JPG/PDF/MP4

Canva API Notes:
- Base URL https://api.canva.com/rest/v1
- Requires an OAuth access token (CANVA_ACCESS_TOKEN) with design:content,
  design:meta, folder and profile scopes
- Exports are asynchronous jobs; poll get_export_status() for the URLs

Every method returns a ToolResult and never raises for HTTP failures.
"""

import asyncio
from typing import Any

import httpx

from src.tools import MCPTool, ToolRegistry, ToolResult
from src.tools.http import request_json
from src.utils.config import get_config
from src.utils.logger import Logger

logger = Logger("CanvaTools")

EXPORT_FORMATS = ("jpg", "png", "pdf", "mp4")
BITCOIN_SEARCH_TERMS = ["bitcoin", "btc", "cryptocurrency", "crypto"]

# Sizes for the education designs created by the daily workflow
EDUCATION_DESIGNS = [
    {"key": "price_alert", "title": "Bitcoin Price Alert", "width": 1080, "height": 1080},
    {"key": "fee_guide", "title": "Fee Education Guide", "width": 1200, "height": 800},
    {"key": "achievement", "title": "Achievement Certificate", "width": 1600, "height": 900},
]


class CanvaAPIError(RuntimeError):
    """Raised internally when Canva is unconfigured or answers with an error."""


def _error_message(error: Exception) -> str:
    if isinstance(error, httpx.HTTPStatusError):
        return f"Canva API error: {error.response.status_code} - {error.response.text}"
    return str(error) or type(error).__name__


class CanvaTools:
    """
    Async wrapper around the Canva Connect API.

    Example:
        canva = CanvaTools()
        result = await canva.test_connection()
        if result.success:
            designs = await canva.get_bitcoin_designs()
    """

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None
    ):
        self._access_token = access_token
        self._base_url = base_url
        self.client = client

    @property
    def access_token(self) -> str | None:
        return self._access_token or get_config().canva.access_token

    @property
    def base_url(self) -> str:
        return (self._base_url or get_config().canva.api_url).rstrip("/")

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """
        Make an authenticated request to the Canva API.

        Raises:
            CanvaAPIError: If no access token is configured
            httpx.HTTPError: On HTTP failures
        """
        token = self.access_token
        if not token:
            raise CanvaAPIError("Canva is not configured. Set CANVA_ACCESS_TOKEN in .env")

        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        return await request_json(
            method, f"{self.base_url}{endpoint}", headers=headers, client=self.client, **kwargs
        )

    async def _call(self, action: str, coro) -> ToolResult:
        """Await a request coroutine and fold failures into a ToolResult."""
        try:
            return ToolResult(success=True, data=await coro)
        except (CanvaAPIError, httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to {action}", e)
            return ToolResult(success=False, error=_error_message(e))

    # ==========================================================================
    # Designs
    # ==========================================================================

    async def _list_designs(self, query: str | None, limit: int) -> dict:
        designs: list[dict] = []
        continuation = None

        while len(designs) < limit:
            params: dict[str, Any] = {}
            if query:
                params["query"] = query
            if continuation:
                params["continuation"] = continuation

            page = await self._request("GET", "/designs", params=params)
            designs.extend(page.get("items", []))
            continuation = page.get("continuation")
            if not continuation:
                break

        return {
            "designs": designs[:limit],
            "count": min(len(designs), limit),
            "has_more": bool(continuation) or len(designs) > limit,
        }

    async def list_designs(self, query: str | None = None, limit: int = 20) -> ToolResult:
        """List the user's designs, optionally filtered by a search query."""
        logger.info("Listing Canva designs", {"query": query, "limit": limit})
        return await self._call("list designs", self._list_designs(query, limit))

    async def search_designs(self, query: str, limit: int = 20) -> ToolResult:
        """Search designs by title and content."""
        return await self.list_designs(query=query, limit=limit)

    async def _get_design(self, design_id: str) -> dict:
        payload = await self._request("GET", f"/designs/{design_id}")
        return payload.get("design", payload)

    async def get_design(self, design_id: str) -> ToolResult:
        """Get one design's metadata and edit/view URLs."""
        return await self._call("get design", self._get_design(design_id))

    async def _create_design(
        self,
        design_type: str | None,
        title: str | None,
        width: int | None,
        height: int | None
    ) -> dict:
        if width and height:
            spec = {"type": "custom", "width": width, "height": height}
        else:
            spec = {"type": "preset", "name": design_type or "presentation"}

        body: dict[str, Any] = {"design_type": spec}
        if title:
            body["title"] = title

        payload = await self._request("POST", "/designs", json=body)
        return payload.get("design", payload)

    async def create_design(
        self,
        design_type: str | None = None,
        title: str | None = None,
        width: int | None = None,
        height: int | None = None
    ) -> ToolResult:
        """
        Create a blank design.

        Args:
            design_type: Preset name (doc, whiteboard, presentation)
            title: Design title
            width: Custom width in pixels (with height, overrides the preset)
            height: Custom height in pixels
        """
        logger.info("Creating Canva design", {"design_type": design_type, "title": title})
        return await self._call("create design", self._create_design(design_type, title, width, height))

    # ==========================================================================
    # Exports
    # ==========================================================================

    async def _export_design(self, design_id: str, export_format: str) -> dict:
        if export_format not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format '{export_format}'")
        payload = await self._request(
            "POST", "/exports", json={"design_id": design_id, "format": {"type": export_format}}
        )
        return payload.get("job", payload)

    async def export_design(self, design_id: str, export_format: str = "png") -> ToolResult:
        """Start an export job for a design."""
        logger.info("Exporting Canva design", {"design_id": design_id, "format": export_format})
        return await self._call("export design", self._export_design(design_id, export_format))

    async def _get_export_status(self, job_id: str) -> dict:
        payload = await self._request("GET", f"/exports/{job_id}")
        return payload.get("job", payload)

    async def get_export_status(self, job_id: str) -> ToolResult:
        """Poll an export job. Completed jobs carry download URLs."""
        return await self._call("get export status", self._get_export_status(job_id))

    async def batch_export_designs(self, design_ids: list[str], export_format: str = "png") -> ToolResult:
        """
        Start export jobs for several designs concurrently.

        Individual failures are reported per design instead of failing the batch.
        """
        logger.info("Batch exporting Canva designs", {"count": len(design_ids), "format": export_format})
        results = await asyncio.gather(*(self.export_design(d, export_format) for d in design_ids))

        jobs = []
        for design_id, result in zip(design_ids, results):
            if result.success:
                jobs.append({"design_id": design_id, **result.data})
            else:
                jobs.append({"design_id": design_id, "status": "failed", "error": result.error})

        failed = sum(1 for job in jobs if job.get("status") == "failed")
        return ToolResult(success=True, data={
            "export_jobs": jobs,
            "total_designs": len(design_ids),
            "successful_exports": len(jobs) - failed,
            "failed_exports": failed,
        })

    # ==========================================================================
    # Folders
    # ==========================================================================

    async def _list_folders(self) -> dict:
        payload = await self._request("GET", "/folders/root/items", params={"item_types": "folder"})
        folders = [item.get("folder", item) for item in payload.get("items", [])]
        return {"folders": folders, "count": len(folders)}

    async def list_folders(self) -> ToolResult:
        """List top-level folders."""
        return await self._call("list folders", self._list_folders())

    async def _create_folder(self, name: str, parent_folder_id: str) -> dict:
        payload = await self._request(
            "POST", "/folders", json={"name": name, "parent_folder_id": parent_folder_id}
        )
        return payload.get("folder", payload)

    async def create_folder(self, name: str, parent_folder_id: str = "root") -> ToolResult:
        """Create a folder."""
        logger.info("Creating Canva folder", {"name": name})
        return await self._call("create folder", self._create_folder(name, parent_folder_id))

    # ==========================================================================
    # Account
    # ==========================================================================

    async def _user_profile(self) -> dict:
        identity = await self._request("GET", "/users/me")
        profile = await self._request("GET", "/users/me/profile")
        return {**identity.get("team_user", {}), **profile.get("profile", {})}

    async def get_user_profile(self) -> ToolResult:
        """Get the connected user's ids and display name."""
        return await self._call("get user profile", self._user_profile())

    async def test_connection(self) -> ToolResult:
        """
        Check that the token works.

        Returns:
            ToolResult whose data carries `connected` and the user ids
        """
        logger.info("Testing Canva API connection")
        result = await self._call("test connection", self._request("GET", "/users/me"))
        if not result.success:
            return result

        user = result.data.get("team_user", {})
        return ToolResult(success=True, data={
            "connected": True,
            "user_id": user.get("user_id"),
            "team_id": user.get("team_id"),
            "api_url": self.base_url,
        })

    # ==========================================================================
    # Bitcoin education workflows
    # ==========================================================================

    async def get_bitcoin_designs(self, limit: int = 20) -> ToolResult:
        """Find designs matching any Bitcoin search term, de-duplicated by id."""
        results = await asyncio.gather(
            *(self.list_designs(query=term, limit=limit) for term in BITCOIN_SEARCH_TERMS)
        )

        failures = [r for r in results if not r.success]
        if len(failures) == len(results):
            return failures[0]

        seen: dict[str, dict] = {}
        for result in results:
            if result.success:
                for design in result.data["designs"]:
                    seen.setdefault(design.get("id"), design)

        designs = list(seen.values())[:limit]
        return ToolResult(success=True, data={
            "designs": designs,
            "count": len(designs),
            "search_terms": BITCOIN_SEARCH_TERMS,
        })

    async def create_bitcoin_education_designs(self, bitcoin_data: dict) -> ToolResult:
        """
        Create the three daily education designs.

        Titles carry the current price and congestion so the designs are
        easy to find in the Canva library.

        Args:
            bitcoin_data: Dict with price, fees, congestion and prompts

        Returns:
            ToolResult with {"designs": [...], "method": "rest_api"}
        """
        price = round(bitcoin_data.get("price", 0))
        congestion = bitcoin_data.get("congestion", "Unknown")

        results = await asyncio.gather(*(
            self.create_design(
                title=f"{spec['title']} - ${price:,} ({congestion} congestion)",
                width=spec["width"],
                height=spec["height"],
            )
            for spec in EDUCATION_DESIGNS
        ))

        designs = []
        errors = []
        for spec, result in zip(EDUCATION_DESIGNS, results):
            if result.success:
                designs.append({"design_type": spec["key"], **result.data})
            else:
                errors.append(f"{spec['key']}: {result.error}")

        if not designs:
            return ToolResult(success=False, error="; ".join(errors) or "No designs created")

        return ToolResult(success=True, data={
            "designs": designs,
            "method": "rest_api",
            "errors": errors,
        })


# Shared instance
canva_tools = CanvaTools()


# ==============================================================================
# Tools
# ==============================================================================

async def _search_designs(params: dict) -> ToolResult:
    query = params.get("query")
    if not query:
        return await canva_tools.get_bitcoin_designs(params.get("limit", 20))
    return await canva_tools.search_designs(query, params.get("limit", 20))


async def _create_design(params: dict) -> ToolResult:
    return await canva_tools.create_design(
        design_type=params.get("design_type"),
        title=params.get("title"),
        width=params.get("width"),
        height=params.get("height"),
    )


async def _export_design(params: dict) -> ToolResult:
    design_ids = params.get("design_ids") or []
    if not design_ids:
        return ToolResult(success=False, error="At least one design id is required")
    return await canva_tools.batch_export_designs(design_ids, params.get("format", "png"))


async def _export_status(params: dict) -> ToolResult:
    job_id = params.get("job_id")
    if not job_id:
        return ToolResult(success=False, error="Job ID is required")
    return await canva_tools.get_export_status(job_id)


search_designs_tool = MCPTool(
    name="canva_search_designs",
    description="Search Canva designs. Without a query, returns Bitcoin-related designs.",
    parameters={
        "type": "object",
        "properties": {
            "query": {"type": "string"},
            "limit": {"type": "integer", "minimum": 1, "maximum": 100, "default": 20}
        },
        "required": []
    },
    execute=_search_designs
)

create_design_tool = MCPTool(
    name="canva_create_design",
    description="Create a blank Canva design from a preset or custom size.",
    parameters={
        "type": "object",
        "properties": {
            "design_type": {"type": "string", "enum": ["doc", "whiteboard", "presentation"]},
            "title": {"type": "string"},
            "width": {"type": "integer", "minimum": 40, "maximum": 8000},
            "height": {"type": "integer", "minimum": 40, "maximum": 8000}
        },
        "required": []
    },
    execute=_create_design
)

export_designs_tool = MCPTool(
    name="canva_export_designs",
    description="Start export jobs for one or more Canva designs.",
    parameters={
        "type": "object",
        "properties": {
            "design_ids": {"type": "array", "items": {"type": "string"}},
            "format": {"type": "string", "enum": list(EXPORT_FORMATS), "default": "png"}
        },
        "required": ["design_ids"]
    },
    execute=_export_design
)

export_status_tool = MCPTool(
    name="canva_export_status",
    description="Check the status of a Canva export job and get download URLs.",
    parameters={
        "type": "object",
        "properties": {
            "job_id": {"type": "string"}
        },
        "required": ["job_id"]
    },
    execute=_export_status
)


def register_canva_tools(registry: ToolRegistry) -> None:
    """Register the Canva tools with a registry."""
    registry.register(search_designs_tool)
    registry.register(create_design_tool)
    registry.register(export_designs_tool)
    registry.register(export_status_tool)
    logger.debug("Registered Canva tools")
