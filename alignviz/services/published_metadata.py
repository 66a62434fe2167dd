"""Directories for published artifacts.

Each kind of published artifact lives in its own subdirectory of the
configured publish root, e.g. ``<PUBLISH_DIR>/AVRO/``.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Optional

from alignviz.config import Settings, get_settings
from alignviz.logging_config import get_logger
from alignviz.services.visualization import AlignmentVisualizationUpdate

logger = get_logger(__name__)


class PublishMetadataType(str, Enum):
    """Kinds of published artifacts."""

    AVRO = "avro"
    ALIGNMENT_VISUALIZATION = "alignment_visualization"


class PublishPathError(ValueError):
    """Raised when an artifact would be written outside its publish directory."""


class PublishedMetadata(ABC):
    """A published artifact directory."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    @abstractmethod
    def metadata_type(self) -> PublishMetadataType:
        ...

    @property
    @abstractmethod
    def directory_path(self) -> str:
        """Subdirectory name, with a trailing slash."""

    def directory(self) -> Path:
        """Absolute-or-configured directory the artifacts are written to."""
        return Path(self.settings.publish_dir) / self.directory_path

    def relative_directory(self) -> str:
        """Directory as seen by clients, relative to the published root."""
        return f"{self.settings.publish_relative_dir.rstrip('/')}/{self.directory_path}"

    def setup(self) -> Path:
        """Create the directory if needed."""
        directory = self.directory()
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Publish directory ready", type=self.metadata_type.value, path=str(directory))
        return directory


class AvroMetadata(PublishedMetadata):
    """Directory for published Avro files."""

    metadata_type = PublishMetadataType.AVRO
    directory_path = "AVRO/"


class AlignmentVisualizationMetadata(PublishedMetadata):
    """Directory for published alignment visualization documents."""

    metadata_type = PublishMetadataType.ALIGNMENT_VISUALIZATION
    directory_path = "ALIGNMENT_VISUALIZATION/"

    def publish(self, update: AlignmentVisualizationUpdate, indent: Optional[int] = None) -> Path:
        """
        Write ``<worksheetId>.json`` into the publish directory.

        Args:
            update: Visualization update to publish
            indent: Pretty-print indent (defaults to the JSON_INDENT setting)

        Raises:
            PublishPathError: If the worksheet id does not name a file inside the directory
            DocumentEncodingError: If the document cannot be encoded; no file is written
        """
        file_name = self._file_name(update.worksheet_id)
        if indent is None:
            indent = self.settings.json_indent
        content = update.to_json(indent=indent)

        directory = self.setup()
        path = directory / file_name
        if not path.resolve().is_relative_to(directory.resolve()):
            raise PublishPathError(f"Worksheet id escapes the publish directory: {update.worksheet_id!r}")
        path.write_text(content, encoding="utf-8")
        logger.info("Published alignment visualization", worksheet_id=update.worksheet_id, path=str(path))
        return path

    @staticmethod
    def _file_name(worksheet_id: str) -> str:
        file_name = f"{worksheet_id}.json"
        if not worksheet_id or worksheet_id in (".", "..") or Path(file_name).name != file_name:
            raise PublishPathError(f"Worksheet id is not a valid file name: {worksheet_id!r}")
        return file_name


PUBLISHED_METADATA: dict[PublishMetadataType, type[PublishedMetadata]] = {
    PublishMetadataType.AVRO: AvroMetadata,
    PublishMetadataType.ALIGNMENT_VISUALIZATION: AlignmentVisualizationMetadata,
}


def get_published_metadata(
    metadata_type: PublishMetadataType, settings: Optional[Settings] = None
) -> PublishedMetadata:
    """Look up the publish directory handler for an artifact type."""
    return PUBLISHED_METADATA[metadata_type](settings)
