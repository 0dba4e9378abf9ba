"""
Request dependencies for shared clients and entity payloads.
"""
from dataclasses import dataclass, field

from fastapi import HTTPException, Request
from starlette.datastructures import UploadFile

from app.services.image_upload import ImageUploadService

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def get_image_uploader(request: Request) -> ImageUploadService:
    return request.app.state.image_uploader


@dataclass
class EntityPayload:
    """Fields of a product or store form plus the optional image file."""
    data: dict = field(default_factory=dict)
    image: bytes | None = None


async def entity_payload(request: Request) -> EntityPayload:
    """Read a JSON body, or form fields with an optional ``image`` file."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        payload = EntityPayload()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == "image" and value.filename:
                    content = await value.read()
                    payload.image = content or None
            else:
                payload.data[key] = value
        return payload

    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="El cuerpo de la petición no es JSON válido")

    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="El cuerpo de la petición debe ser un objeto")

    return EntityPayload(data=data)
