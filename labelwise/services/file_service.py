"""File handling service for label image uploads."""
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import UploadFile
from PIL import Image

from labelwise.config import settings

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = ["image/jpeg", "image/jpg", "image/png", "image/webp"]


class FileService:
    """Service for handling label image uploads."""

    def __init__(self, upload_dir: Optional[str] = None, max_width: Optional[int] = None):
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self.max_width = max_width or settings.max_image_width

    async def save_label_image(self, file: UploadFile) -> str:
        """
        Save an uploaded label image to disk.

        Args:
            file: Uploaded file from FastAPI

        Returns:
            Path to saved file

        Raises:
            ValueError: If file type is invalid or the file is empty
        """
        if file.content_type not in ALLOWED_CONTENT_TYPES:
            raise ValueError(
                f"Invalid file type: {file.content_type}. Allowed: {ALLOWED_CONTENT_TYPES}"
            )

        contents = await file.read()
        if not contents:
            raise ValueError("Uploaded file is empty")

        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        unique_id = str(uuid.uuid4())[:8]
        extension = Path(file.filename or "").suffix.lower() or ".jpg"
        file_path = self.upload_dir / f"{timestamp}_{unique_id}{extension}"

        with open(file_path, "wb") as f:
            f.write(contents)

        self._optimize_image(file_path)

        return str(file_path)

    def _optimize_image(self, file_path: Path):
        """
        Shrink oversized images before they are sent for OCR.

        Args:
            file_path: Path to image file
        """
        try:
            with Image.open(file_path) as img:
                if img.width <= self.max_width and img.mode != "RGBA":
                    return

                # Convert RGBA to RGB if needed
                if img.mode == "RGBA":
                    rgb_img = Image.new("RGB", img.size, (255, 255, 255))
                    rgb_img.paste(img, mask=img.split()[3])
                    img = rgb_img

                if img.width > self.max_width:
                    ratio = self.max_width / img.width
                    new_height = int(img.height * ratio)
                    img = img.resize((self.max_width, new_height), Image.Resampling.LANCZOS)

                img.save(file_path, optimize=True, quality=85)

        except Exception as e:
            # If optimization fails, keep original
            logger.warning("Could not optimize image %s: %s", file_path, e)

    def delete_file(self, file_path: str) -> bool:
        """
        Delete a file from disk.

        Returns:
            True if deleted, False if file not found
        """
        try:
            path = Path(file_path)
            if path.exists():
                path.unlink()
                return True
            return False
        except OSError as e:
            logger.error("Error deleting file %s: %s", file_path, e)
            return False
