"""Import all models so SQLModel metadata knows about them."""
from filedesk.models.files.file_record import FileRecord
from filedesk.models.users.profile_picture import ProfilePicture

__all__ = ["FileRecord", "ProfilePicture"]
