"""
Domain Exceptions
"""


class StorageError(RuntimeError):
    """Backing store is unavailable or rejected an operation"""


class InboxPermissionError(PermissionError):
    """SMS inbox cannot be read (permission denied or unsupported platform)"""
