"""
Image service for handling gym logo uploads
"""
import io
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from gymcrm.core import settings
from gymcrm.core.logging_config import get_logger

logger = get_logger("services.images")


class ImageService:
    """Validate, normalise and store logo images under the uploads directory"""

    SUBDIR = "logos"
    ALLOWED_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif'}
    ALLOWED_FORMATS = {'JPEG', 'PNG', 'GIF'}
    MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
    TARGET_SIZE = (512, 512)

    def __init__(self, upload_root: Optional[Path] = None):
        self.upload_root = Path(upload_root or settings.UPLOAD_DIR)
        self.upload_path = self.upload_root / self.SUBDIR
        self.upload_path.mkdir(parents=True, exist_ok=True)

    def validate_image(self, file_data: bytes, filename: str) -> Tuple[bool, str]:
        """
        Validate an uploaded logo

        Args:
            file_data: Image file bytes
            filename: Original filename

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not file_data:
            return False, "No file uploaded"

        if len(file_data) > self.MAX_FILE_SIZE:
            return False, f"File size exceeds {self.MAX_FILE_SIZE // (1024*1024)}MB limit"

        ext = Path(filename or "").suffix.lower()
        if ext not in self.ALLOWED_EXTENSIONS:
            return False, "Only image files are allowed (jpeg, jpg, png, gif)"

        try:
            img = Image.open(io.BytesIO(file_data))
            img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            return False, f"Invalid image file: {str(e)}"
        if img.format not in self.ALLOWED_FORMATS:
            return False, "Only image files are allowed (jpeg, jpg, png, gif)"
        return True, ""

    def process_and_save_image(self, file_data: bytes, gym_id: int, original_filename: str) -> str:
        """
        Shrink the logo to fit ``TARGET_SIZE`` and write it to disk

        Returns:
            Public path of the stored file (``/uploads/logos/<name>``)
        """
        img = Image.open(io.BytesIO(file_data))
        ext = Path(original_filename).suffix.lower()

        if ext in ('.jpg', '.jpeg') and img.mode != 'RGB':
            img = img.convert('RGB')

        # Logos keep their aspect ratio, no square crop
        if img.size[0] > self.TARGET_SIZE[0] or img.size[1] > self.TARGET_SIZE[1]:
            img.thumbnail(self.TARGET_SIZE, Image.Resampling.LANCZOS)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
        filename = f"gym_{gym_id}_{timestamp}{ext}"
        filepath = self.upload_path / filename

        if ext in ('.jpg', '.jpeg'):
            img.save(filepath, 'JPEG', quality=85, optimize=True)
        elif ext == '.gif':
            img.save(filepath, 'GIF')
        else:
            img.save(filepath, 'PNG', optimize=True)

        logger.info(f"Stored logo for gym {gym_id} as {filename}")
        return f"/uploads/{self.SUBDIR}/{filename}"

    def delete_old_logo(self, logo_path: Optional[str]) -> bool:
        """Remove a previously stored logo; external URLs are left alone"""
        prefix = f"/uploads/{self.SUBDIR}/"
        if not logo_path or not logo_path.startswith(prefix):
            return True

        full_path = self.upload_path / Path(logo_path).name
        try:
            if full_path.exists():
                full_path.unlink()
            return True
        except OSError as e:
            logger.warning(f"Error deleting old logo {full_path}: {str(e)}")
            return False
