"""Pull/merge-request reference detection and resolution."""

from careerlog.references.clients import ReferencePlatformClient
from careerlog.references.resolver import (
    ReferenceResolver,
    ResolutionCache,
    extract_reference_number,
    is_message_helpful,
    parse_remote_url,
)
from careerlog.references.schemas import ReferenceInfo, RepoPlatform

__all__ = [
    "ReferenceInfo",
    "ReferencePlatformClient",
    "ReferenceResolver",
    "RepoPlatform",
    "ResolutionCache",
    "extract_reference_number",
    "is_message_helpful",
    "parse_remote_url",
]
