from filedesk.rest.module import RestModule

from .profile_picture_methods import (
    delete_profile_picture_method,
    profile_picture_method,
    set_profile_picture_method,
)

profile_module = RestModule(
    name="profile",
    parent_module="user",
    methods=[set_profile_picture_method, delete_profile_picture_method, profile_picture_method],
)
