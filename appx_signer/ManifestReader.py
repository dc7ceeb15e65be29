"""
ManifestReader - extracts the publisher identity from AppxManifest.xml.

The manifest is streamed and reading stops at the first Identity element,
so a broken tail after it does not matter and document order decides which
Identity wins if there are several.
"""
import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from appx_signer.errors import ManifestError

IDENTITY_TAG = "Identity"
PUBLISHER_ATTRIBUTE = "Publisher"


def _local_name(tag: str) -> str:
    # Appx manifests put Identity in the default namespace: {uri}Identity
    return tag.rsplit('}', 1)[-1]


def read_publisher(manifest_path: Path) -> str:
    """
    Returns the Publisher attribute of the first Identity element.

    Args:
        manifest_path: Path to AppxManifest.xml

    Raises:
        ManifestError: If the file cannot be parsed, has no Identity element,
            or the first Identity has no non-empty Publisher
    """
    try:
        for _event, element in ET.iterparse(str(manifest_path), events=("start",)):
            if _local_name(element.tag) != IDENTITY_TAG:
                continue

            publisher = element.get(PUBLISHER_ATTRIBUTE)
            if not publisher:
                raise ManifestError(f"Publisher missing in {manifest_path.name}")
            logging.info(f"Manifest publisher: {publisher}")
            return publisher
    except ET.ParseError as e:
        raise ManifestError(f"Cannot parse {manifest_path.name}: {e}") from e
    except OSError as e:
        raise ManifestError(f"Cannot read {manifest_path}: {e}") from e

    raise ManifestError(f"No {IDENTITY_TAG} element in {manifest_path.name}")
