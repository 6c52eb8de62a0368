# myqnapcloud/account/models.py

from dataclasses import dataclass, field

@dataclass
class APIStatus:
    """Envelope fields every account endpoint returns"""
    message: str = ""
    code: int = 0

@dataclass
class UserProfile:
    """The signed-in user's profile"""
    first_name: str = ""
    last_name: str = ""
    display_name: str = ""
    subscribed: bool = False
    language: str = ""
    gender: int = 0
    created_at: str = ""
    updated_at: str = ""
    portal_notify: bool = False
    simple_token: str = ""
    # the service has been seen sending the misspelled key
    birthday: str = field(default="", metadata={"aliases": ("brithday",)})
    mobile_number: str = ""
    user_id: str = ""
    email: str = ""

@dataclass
class GetUserResponse(APIStatus):
    """Body of ``GET /{version}/me``"""
    result: UserProfile = field(default_factory=UserProfile)
