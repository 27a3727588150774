class AttachmentValidationError(Exception):
    """Uploaded files were rejected (type or total size)."""

    def __init__(self, message, field='attachments'):
        super().__init__(message)
        self.message = message
        self.field = field
