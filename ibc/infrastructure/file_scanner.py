import logging
from pathlib import Path
from typing import List
from ibc.domain.errors import ConfigurationError
from ibc.domain.models import ImageFile

logger = logging.getLogger(__name__)

PNG_SUFFIX = ".png"

def is_image_candidate(name: str, suffix: str = PNG_SUFFIX) -> bool:
    """Exact, case-sensitive suffix match ('a.PNG' is not a candidate)."""
    return name.endswith(suffix)

def validate_directory(directory: Path) -> Path:
    directory = Path(directory)
    if not directory.exists():
        raise ConfigurationError(f"Directory {directory} does not exist.")
    if not directory.is_dir():
        raise ConfigurationError(f"The path {directory} is not a directory.")
    return directory

class FileScanner:
    """Lists image candidates directly inside a directory (no recursion)."""

    def __init__(self, suffix: str = PNG_SUFFIX):
        self.suffix = suffix

    def scan(self, directory: Path) -> List[ImageFile]:
        directory = validate_directory(directory)
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise ConfigurationError(f"Cannot list directory {directory}: {e}") from e
        images = [
            ImageFile(path=entry)
            for entry in entries
            if is_image_candidate(entry.name, self.suffix) and entry.is_file()
        ]
        logger.debug(f"Scanned {directory}: {len(images)} of {len(entries)} entries match {self.suffix}")
        return images
