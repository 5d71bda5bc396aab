"""Media entity - an uploaded file usable as the value of a media field."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Media:
    """Uploaded media file.

    Attributes:
        id: Unique identifier.
        filename: Stored (unique) filename.
        original_name: Filename as uploaded by the operator.
        mime_type: Content type reported at upload.
        size: Size in bytes.
        path: Public URL path of the file, e.g. ``/uploads/<filename>``.
        description: Free-form description.
        uploaded_at: Upload timestamp.
    """

    id: str
    filename: str
    original_name: str
    mime_type: str
    size: int
    path: str
    description: str = ""
    uploaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
