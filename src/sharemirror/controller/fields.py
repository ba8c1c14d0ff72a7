"""Field definitions for Google Drive API requests."""

from __future__ import annotations

FOLDER_MIME: str = "application/vnd.google-apps.folder"

FILE_FIELDS: str = "id,name,mimeType,parents"
