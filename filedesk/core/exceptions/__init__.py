# filedesk/core/exceptions/__init__.py

from .base_exception import (
    BaseBusinessException,
    NotFoundException,
    ValidationException,
    UnauthorizedException,
    PermissionDeniedException,
)
from .upload_exceptions import (
    TooManyFilesException,
    FileTooLargeException,
    MimeTypeNotAllowedException,
    NoFilesUploadedException,
    UnknownUploadException,
    UploadedFileNotFoundException,
    FileRecordNotFoundException,
)
from .user_exceptions import ProfilePictureNotFoundException
from .database_exceptions import (
    DuplicateEntryException,
    DatabaseUnavailableException,
    DatabaseOperationException,
)
from .parameter_exceptions import (
    MissingParameterException,
    InvalidParameterException,
)

__all__ = [
    "BaseBusinessException",
    "NotFoundException",
    "ValidationException",
    "UnauthorizedException",
    "PermissionDeniedException",

    "TooManyFilesException",
    "FileTooLargeException",
    "MimeTypeNotAllowedException",
    "NoFilesUploadedException",
    "UnknownUploadException",
    "UploadedFileNotFoundException",
    "FileRecordNotFoundException",
    "ProfilePictureNotFoundException",

    "DuplicateEntryException",
    "DatabaseUnavailableException",
    "DatabaseOperationException",

    "MissingParameterException",
    "InvalidParameterException",
]
