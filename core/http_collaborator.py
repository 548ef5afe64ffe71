# core/http_collaborator.py
"""
Storage collaborator speaking to the inventory HTTP service.
"""
import logging

import httpx

from .attachment_stager import FileRef
from .collaborator import StorageCollaborator, UploadResult
from .entities import AssetRecord, AttachmentInfo, ComponentRecord, SlotType
from .errors import DeletionError, NotFoundError, UploadError, ValidationError

logger = logging.getLogger(__name__)


def _detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    return str(detail) if detail else f"HTTP {response.status_code}"


class HttpStorageCollaborator(StorageCollaborator):
    """
    Collaborator backed by the service's ``/api/v1`` endpoints.

    The httpx client is owned by the caller, who sets its base URL and
    closes it.

    Example:
        >>> async with httpx.AsyncClient(base_url="http://localhost:8000") as client:
        ...     inventory = Inventory(HttpStorageCollaborator(client))
        ...     await inventory.refresh()
    """

    def __init__(self, client: httpx.AsyncClient, prefix: str = "/api/v1"):
        self.client = client
        self.prefix = prefix.rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    async def list_assets(self) -> list[AssetRecord]:
        response = await self.client.get(self._url("/assets"))
        response.raise_for_status()
        return [AssetRecord.model_validate(item) for item in response.json()]

    async def list_components(self) -> list[ComponentRecord]:
        response = await self.client.get(self._url("/components"))
        response.raise_for_status()
        return [ComponentRecord.model_validate(item) for item in response.json()]

    async def get_asset(self, asset_id: str) -> AssetRecord:
        response = await self.client.get(self._url(f"/assets/{asset_id}"))
        if response.status_code == 404:
            raise NotFoundError(_detail(response))
        response.raise_for_status()
        return AssetRecord.model_validate(response.json())

    async def upsert_asset(self, asset: AssetRecord) -> AssetRecord:
        response = await self.client.put(
            self._url("/assets"), json=asset.model_dump(mode="json")
        )
        self._raise_for_validation(response)
        return AssetRecord.model_validate(response.json())

    async def delete_asset(self, asset_id: str) -> None:
        await self._delete_entity(self._url(f"/assets/{asset_id}"), asset_id)

    async def upsert_component(self, component: ComponentRecord) -> ComponentRecord:
        response = await self.client.put(
            self._url("/components"), json=component.model_dump(mode="json")
        )
        self._raise_for_validation(response)
        return ComponentRecord.model_validate(response.json())

    async def delete_component(self, component_id: str) -> None:
        await self._delete_entity(self._url(f"/components/{component_id}"), component_id)

    async def upload_attachment(
        self,
        file_ref: FileRef,
        slot: SlotType,
        owner_id: str,
    ) -> UploadResult:
        slot = SlotType(slot)
        if file_ref.content is None:
            raise UploadError(file_ref.name, slot.value, "file has no content")

        data = {"owner_id": owner_id}
        if file_ref.last_modified is not None:
            data["last_modified"] = str(file_ref.last_modified)
        files = {
            "file": (
                file_ref.name,
                file_ref.content,
                file_ref.mime_type or "application/octet-stream",
            )
        }
        try:
            response = await self.client.post(
                self._url(f"/attachments/{slot.value}"), data=data, files=files
            )
        except httpx.HTTPError as exc:
            raise UploadError(file_ref.name, slot.value, str(exc)) from exc
        if response.is_error:
            raise UploadError(file_ref.name, slot.value, _detail(response))

        try:
            body = response.json()
            return UploadResult(
                path=body["path"],
                file_info=AttachmentInfo.model_validate(body["file_info"]),
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise UploadError(file_ref.name, slot.value, f"malformed response: {exc}") from exc

    async def delete_attachment_file(self, path: str) -> None:
        try:
            response = await self.client.post(
                self._url("/attachments/delete"), json={"path": path}
            )
        except httpx.HTTPError as exc:
            raise DeletionError(path, str(exc)) from exc
        if response.is_error:
            raise DeletionError(path, _detail(response))

    async def _delete_entity(self, url: str, record_id: str) -> None:
        try:
            response = await self.client.delete(url)
        except httpx.HTTPError as exc:
            raise DeletionError(record_id, str(exc)) from exc
        # a missing record is already gone
        if response.is_error and response.status_code != 404:
            raise DeletionError(record_id, _detail(response))

    @staticmethod
    def _raise_for_validation(response: httpx.Response) -> None:
        if response.status_code in (400, 422):
            raise ValidationError(_detail(response))
        response.raise_for_status()
