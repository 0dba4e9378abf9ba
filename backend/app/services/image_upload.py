"""
Image Upload Service

Sends product and store images to Cloudinary and returns their public URL.
Images are normalised before upload:
- Converted to RGB JPEG
- Resized down to a maximum width
- Compressed for web delivery
"""
import logging
from io import BytesIO
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from PIL import Image, UnidentifiedImageError

from app.config import Settings
from app.errors import ImageUploadError, InvalidImageError

logger = logging.getLogger(__name__)


class ImageUploadService:
    """Uploads image bytes to Cloudinary through the official SDK."""

    def __init__(
        self,
        cloud_name: Optional[str],
        api_key: Optional[str],
        api_secret: Optional[str],
        folder: str = "productos-escasos",
        max_width: int = 800,
        jpeg_quality: int = 85,
        timeout: float = 30.0,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.max_width = max_width
        self.jpeg_quality = jpeg_quality
        self.timeout = timeout

        if self.configured:
            cloudinary.config(
                cloud_name=cloud_name,
                api_key=api_key,
                api_secret=api_secret,
                secure=True,
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageUploadService":
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            folder=settings.cloudinary_folder,
            max_width=settings.image_max_width,
            jpeg_quality=settings.image_jpeg_quality,
            timeout=settings.upload_timeout,
        )

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def optimize(self, content: bytes) -> bytes:
        """Resize and compress image for web delivery."""
        try:
            img = Image.open(BytesIO(content))
            img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise InvalidImageError() from e

        # Convert to RGB if necessary (for JPEG)
        if img.mode != "RGB":
            img = img.convert("RGB")

        # Resize if too large
        if img.width > self.max_width:
            ratio = self.max_width / img.width
            new_height = max(1, int(img.height * ratio))
            img = img.resize((self.max_width, new_height), Image.Resampling.LANCZOS)

        output = BytesIO()
        img.save(output, format="JPEG", quality=self.jpeg_quality, optimize=True)
        return output.getvalue()

    def upload(self, content: bytes, folder: Optional[str] = None) -> str:
        """
        Upload an image and return its public URL.

        Args:
            content: Raw bytes of the uploaded file
            folder: Cloudinary folder, defaults to the configured one

        Returns:
            The ``secure_url`` reported by Cloudinary
        """
        if not self.configured:
            raise ImageUploadError("Cloudinary credentials are not configured")

        data = self.optimize(content)

        try:
            result = cloudinary.uploader.upload(
                data,
                folder=folder or self.folder,
                resource_type="image",
                timeout=self.timeout,
            )
        except CloudinaryError as e:
            raise ImageUploadError(str(e)) from e

        url = result.get("secure_url")
        if not url:
            raise ImageUploadError("Response did not include secure_url")

        logger.info(f"Uploaded image ({len(data)} bytes) to {url}")
        return url
