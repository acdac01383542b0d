"""
Container format that stores a document together with its strokes.

A container is a ZIP archive with three entries:
    document.pdf       original document bytes, unmodified
    annotations.json   page index -> list of {tool, color, width, points}
    metadata.json      {originalName, createdAt, version}
"""
import io
import json
import logging
import os
import zipfile
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import NamedTuple, Optional

from ...config import Config
from ...utils import write_atomic
from ..annotations.models import AnnotationSet
from ..document.pdf_document import DocumentArtifact
from ..errors import MalformedContainer, MetadataCorrupt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerMetadata:
    """Descriptive data stored next to the document."""
    original_name: str
    created_at: str  # ISO-8601
    version: int = Config.FORMAT_VERSION

    def to_dict(self):
        return {
            'originalName': self.original_name,
            'createdAt': self.created_at,
            'version': self.version
        }

    @staticmethod
    def from_dict(data) -> 'ContainerMetadata':
        """
        Create metadata from its stored form.

        Raises:
            MetadataCorrupt: If required fields are missing or mistyped
        """
        if not isinstance(data, dict):
            raise MetadataCorrupt("Metadata is not an object")
        name = data.get('originalName')
        if not isinstance(name, str) or not name:
            raise MetadataCorrupt("Metadata has no original name")
        version = data.get('version', Config.FORMAT_VERSION)
        if isinstance(version, bool) or not isinstance(version, int):
            raise MetadataCorrupt(f"Invalid format version: {version!r}")
        return ContainerMetadata(
            original_name=name,
            created_at=str(data.get('createdAt', '')),
            version=version
        )


class DecodedContainer(NamedTuple):
    artifact: DocumentArtifact
    annotations: AnnotationSet
    display_name: str


class ContainerCodec:
    """Encodes and decodes containers."""

    @classmethod
    def is_container(cls, data: bytes) -> bool:
        """Check if bytes look like a container archive rather than a plain document."""
        return zipfile.is_zipfile(io.BytesIO(data))

    @classmethod
    def encode(cls, artifact: DocumentArtifact, annotations: AnnotationSet,
               created_at: Optional[datetime] = None) -> bytes:
        """
        Build a container archive.

        Args:
            artifact: Original document
            annotations: Snapshot of the strokes to store
            created_at: Creation time, defaults to now (UTC)

        Returns:
            Archive bytes
        """
        if created_at is None:
            created_at = datetime.now(timezone.utc)
        metadata = ContainerMetadata(
            original_name=artifact.name,
            created_at=created_at.isoformat(),
            version=Config.FORMAT_VERSION
        )

        output = io.BytesIO()
        with zipfile.ZipFile(output, 'w', zipfile.ZIP_DEFLATED) as zipf:
            zipf.writestr(Config.DOCUMENT_ENTRY, artifact.data)
            zipf.writestr(Config.METADATA_ENTRY, json.dumps(metadata.to_dict(), indent=2))
            zipf.writestr(Config.ANNOTATIONS_ENTRY, json.dumps(annotations.to_dict(), indent=2))

        logger.debug("Encoded container for %s (%d strokes)", artifact.name,
                     annotations.stroke_count)
        return output.getvalue()

    @classmethod
    def decode(cls, data: bytes, source_name: Optional[str] = None) -> DecodedContainer:
        """
        Parse a container archive.

        A missing or unreadable metadata entry is not fatal: the display name
        then falls back to the container's own file name.

        Args:
            data: Archive bytes
            source_name: File name the container was loaded from

        Returns:
            The document, its strokes and its display name

        Raises:
            MalformedContainer: If the archive is unreadable or the document
                or annotations entry is missing or invalid
        """
        fallback_name = source_name or Config.DOCUMENT_ENTRY

        try:
            with zipfile.ZipFile(io.BytesIO(data), 'r') as zipf:
                names = set(zipf.namelist())
                for required in (Config.DOCUMENT_ENTRY, Config.ANNOTATIONS_ENTRY):
                    if required not in names:
                        raise MalformedContainer(f"Container is missing {required}")

                document_bytes = zipf.read(Config.DOCUMENT_ENTRY)
                annotations_text = zipf.read(Config.ANNOTATIONS_ENTRY)
                metadata_text = (zipf.read(Config.METADATA_ENTRY)
                                 if Config.METADATA_ENTRY in names else None)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, OSError) as e:
            raise MalformedContainer(f"Not a readable container archive: {e}") from e
        except RuntimeError as e:
            # Encrypted entries
            raise MalformedContainer(f"Container entries cannot be read: {e}") from e

        try:
            annotations = AnnotationSet.from_dict(json.loads(annotations_text.decode('utf-8')))
        except (UnicodeDecodeError, ValueError) as e:
            raise MalformedContainer(f"Invalid annotations entry: {e}") from e

        display_name = fallback_name
        if metadata_text is not None:
            try:
                metadata = cls._parse_metadata(metadata_text)
            except MetadataCorrupt as e:
                logger.warning("Failed to read container metadata, using %r: %s",
                               fallback_name, e)
            else:
                display_name = metadata.original_name
                if metadata.version > Config.FORMAT_VERSION:
                    logger.warning("Container format version %d is newer than %d, "
                                   "reading what is understood", metadata.version,
                                   Config.FORMAT_VERSION)

        logger.info("Decoded container %s (%d strokes on %d page(s))",
                    display_name, annotations.stroke_count, len(annotations))
        return DecodedContainer(
            artifact=DocumentArtifact(document_bytes, display_name),
            annotations=annotations,
            display_name=display_name
        )

    @classmethod
    def read_metadata(cls, data: bytes) -> Optional[ContainerMetadata]:
        """
        Read only the metadata entry of a container.

        Returns:
            The metadata, or None if it is absent or corrupt
        """
        try:
            with zipfile.ZipFile(io.BytesIO(data), 'r') as zipf:
                if Config.METADATA_ENTRY not in zipf.namelist():
                    return None
                metadata_text = zipf.read(Config.METADATA_ENTRY)
        except (zipfile.BadZipFile, OSError) as e:
            raise MalformedContainer(f"Not a readable container archive: {e}") from e

        try:
            return cls._parse_metadata(metadata_text)
        except MetadataCorrupt as e:
            logger.warning("Failed to read container metadata: %s", e)
            return None

    @staticmethod
    def _parse_metadata(metadata_text: bytes) -> ContainerMetadata:
        try:
            data = json.loads(metadata_text.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as e:
            raise MetadataCorrupt(str(e)) from e
        return ContainerMetadata.from_dict(data)

    # ==================== Files ====================

    @classmethod
    def save_to_file(cls, artifact: DocumentArtifact, annotations: AnnotationSet,
                     file_path: str) -> None:
        """Encode a container and write it to disk."""
        cls.write_file(cls.encode(artifact, annotations), file_path)

    @classmethod
    def write_file(cls, data: bytes, file_path: str) -> None:
        """Write encoded container bytes, replacing an existing file only on success."""
        write_atomic(data, file_path, suffix=Config.CONTAINER_EXTENSION)
        logger.info("Saved container %s", file_path)

    @classmethod
    def load_from_file(cls, file_path: str) -> DecodedContainer:
        """Read and decode a container file."""
        with open(file_path, 'rb') as f:
            data = f.read()
        return cls.decode(data, source_name=os.path.basename(file_path))
