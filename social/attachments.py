"""
Post attachment validation and storage.

Files are written through the default storage backend (local disk or
Cloudinary, see settings). ``store_attachments`` returns the stored paths
so a caller whose transaction fails can remove them again with
``discard_files``.
"""

import logging
import mimetypes
import os

from django.conf import settings
from django.core.files.storage import default_storage

from .exceptions import AttachmentValidationError
from .models import PostAttachment

logger = logging.getLogger(__name__)


def _extension(filename):
    return os.path.splitext(filename)[1].lstrip('.').lower()


def validate_attachments(files, existing_size=0):
    """
    Check extension allow-list and total size.

    Args:
        files: Uploaded files (``request.FILES.getlist('attachments')``).
        existing_size: Bytes already attached to the post and kept.

    Raises:
        AttachmentValidationError
    """
    allowed = [ext.strip().lower() for ext in settings.ATTACHMENT_ALLOWED_EXTENSIONS]
    total = existing_size
    for f in files:
        if _extension(f.name) not in allowed:
            raise AttachmentValidationError(
                f"Invalid file type: {f.name}. Allowed: {', '.join(allowed)}"
            )
        total += f.size

    if total > settings.ATTACHMENT_MAX_TOTAL_SIZE:
        limit_mb = settings.ATTACHMENT_MAX_TOTAL_SIZE // (1024 * 1024)
        raise AttachmentValidationError(f"Total size of attachments cannot exceed {limit_mb}MB")


def store_attachments(post, files, user, stored_paths=None):
    """
    Create a PostAttachment per file.

    Stored paths are appended to ``stored_paths`` as each file is written,
    so the caller still knows them when a later file fails.
    """
    if stored_paths is None:
        stored_paths = []
    for f in files:
        mime = getattr(f, 'content_type', None) or mimetypes.guess_type(f.name)[0] or 'application/octet-stream'
        attachment = PostAttachment(
            post=post,
            name=f.name,
            mime=mime,
            size=f.size,
            created_by=user,
        )
        attachment.file.save(f.name, f, save=False)
        stored_paths.append(attachment.file.name)
        attachment.save()
    return stored_paths


def discard_files(paths):
    for path in paths:
        try:
            default_storage.delete(path)
        except OSError as e:
            logger.warning(f"Could not remove stored attachment {path}: {e}")
