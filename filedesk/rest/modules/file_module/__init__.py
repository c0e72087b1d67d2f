from filedesk.rest.module import RestModule

from .get_file_method import get_file_method
from .upload_file_method import upload_file_method

file_module = RestModule(
    name="file",
    methods=[upload_file_method, get_file_method],
)
