"""Canvas size providers: where the cache gets a document's canvas from on a miss."""

from abc import ABC, abstractmethod

import httpx

from slidelayout.config import LayoutSettings
from slidelayout.engine.data_models import DEFAULT_CANVAS, CanvasSize, LayoutRef
from slidelayout.engine.units import emu_to_pt


class CanvasProviderError(Exception):
    """The provider could not fetch metadata for a document."""

    def __init__(self, document_id: str, message: str):
        self.document_id = document_id
        super().__init__(f"{document_id}: {message}")


class CanvasSizeProvider(ABC):
    """Source of canvas metadata for a document.

    Implementations may be slow or fail; the cache absorbs failures, so
    providers should simply raise.
    """

    @abstractmethod
    async def fetch_canvas_size(self, document_id: str) -> CanvasSize:
        """Fetch the canvas size of a document, in points."""

    async def fetch_layouts(self, document_id: str) -> list[LayoutRef]:
        """Fetch the layouts of a document. Providers without layouts return []."""
        return []


class StaticCanvasSizeProvider(CanvasSizeProvider):
    """Provider answering every document with one fixed size."""

    def __init__(self, size: CanvasSize = DEFAULT_CANVAS):
        self.size = size

    async def fetch_canvas_size(self, document_id: str) -> CanvasSize:
        return self.size


class HttpCanvasSizeProvider(CanvasSizeProvider):
    """Reads page size and layouts from a presentations REST API.

    Expects GET {base_url}/presentations/{id} to return a presentation
    resource with pageSize.width/height magnitudes in EMU and a layouts list.
    """

    def __init__(
        self,
        base_url: str,
        access_token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: LayoutSettings) -> "HttpCanvasSizeProvider":
        return cls(
            base_url=settings.provider_base_url,
            access_token=settings.provider_access_token,
            timeout=settings.provider_timeout_seconds,
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def _get_presentation(self, document_id: str, fields: str) -> dict:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    f"/presentations/{document_id}",
                    params={"fields": fields},
                    headers=self._headers(),
                )
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            raise CanvasProviderError(
                document_id, f"HTTP {e.response.status_code} from presentations API"
            ) from e
        except httpx.HTTPError as e:
            raise CanvasProviderError(document_id, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise CanvasProviderError(document_id, "invalid JSON from presentations API") from e

    async def fetch_canvas_size(self, document_id: str) -> CanvasSize:
        """Fetch the page size. A presentation without one gets the default canvas."""
        data = await self._get_presentation(document_id, "pageSize")
        page_size = data.get("pageSize") or {}
        width = (page_size.get("width") or {}).get("magnitude")
        height = (page_size.get("height") or {}).get("magnitude")

        if not width or not height:
            return DEFAULT_CANVAS

        return CanvasSize(width=emu_to_pt(width), height=emu_to_pt(height))

    async def fetch_layouts(self, document_id: str) -> list[LayoutRef]:
        """Fetch layout ids and names."""
        data = await self._get_presentation(
            document_id, "layouts(objectId,layoutProperties(name))"
        )
        return [
            LayoutRef(
                object_id=layout.get("objectId", ""),
                name=(layout.get("layoutProperties") or {}).get("name"),
            )
            for layout in data.get("layouts") or []
        ]
