"""Document-construction service used for DOCX generation.

The orchestrator only sees :class:`DocumentService`. Deployments that run
the HTTP API elsewhere use :class:`HttpDocumentService`; everything else
builds in-process with :class:`LocalDocumentService`.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import httpx

from cv_studio.exceptions import DocumentServiceError
from cv_studio.export.docx_builder import DEFAULT_DOCX_STYLE, build_docx

if TYPE_CHECKING:
    from cv_studio.models.content import CVData

__all__ = [
    "DOCX_ENDPOINT",
    "DocumentService",
    "HttpDocumentService",
    "LocalDocumentService",
]

logger = logging.getLogger(__name__)

DOCX_ENDPOINT = "/api/export/docx"
DEFAULT_TIMEOUT = 30.0


class DocumentService(ABC):
    @abstractmethod
    async def build(self, cv: CVData, style_id: str = DEFAULT_DOCX_STYLE) -> bytes:
        """Return DOCX bytes for *cv* rendered in *style_id*.

        Raises:
            DocumentServiceError: If the document cannot be built.
        """


class LocalDocumentService(DocumentService):
    """Build documents with python-docx on a worker thread."""

    async def build(self, cv: CVData, style_id: str = DEFAULT_DOCX_STYLE) -> bytes:
        try:
            return await asyncio.to_thread(build_docx, cv, style_id)
        except Exception as exc:
            logger.exception("Local DOCX build failed")
            raise DocumentServiceError(f"DOCX generation failed: {exc}") from exc


class HttpDocumentService(DocumentService):
    """POST ``{cvData, templateId}`` to a remote ``/api/export/docx`` route.

    A non-2xx response raises :class:`DocumentServiceError`; there is no retry.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def build(self, cv: CVData, style_id: str = DEFAULT_DOCX_STYLE) -> bytes:
        payload = {
            "cvData": cv.model_dump(mode="json", by_alias=True),
            "templateId": style_id,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(DOCX_ENDPOINT, json=payload)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.error("Document service returned %s for %s", status_code, DOCX_ENDPOINT)
            raise DocumentServiceError(
                f"Failed to generate DOCX (HTTP {status_code})", status_code=status_code
            ) from exc
        except httpx.TimeoutException as exc:
            logger.error("Document service timed out after %ss", self.timeout)
            raise DocumentServiceError(
                f"Document service timed out after {self.timeout}s"
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Error communicating with document service: %s", exc)
            raise DocumentServiceError(f"Document service unavailable: {exc}") from exc

        return response.content
