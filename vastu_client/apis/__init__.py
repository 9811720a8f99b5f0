from .auth_api import AuthApi
from .profile_api import ProfileApi
from .property_api import PropertyApi
from .room_api import RoomApi
from .photo_api import PhotoApi
from .remedy_api import RemedyApi

__all__ = ["AuthApi", "ProfileApi", "PropertyApi", "RoomApi", "PhotoApi", "RemedyApi"]
