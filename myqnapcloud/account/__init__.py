# myqnapcloud/account/__init__.py

"""
Typed façades over the account API resources.
"""

from .models import APIStatus, GetUserResponse, UserProfile
from .services import (
    AccountService,
    ActivityService,
    AvatarService,
    FriendService,
    MeService,
    PasswordService,
    ResourceCall,
    ResourceService,
    UserService
)

__all__ = [
    'APIStatus',
    'GetUserResponse',
    'UserProfile',
    'AccountService',
    'ActivityService',
    'AvatarService',
    'FriendService',
    'MeService',
    'PasswordService',
    'ResourceCall',
    'ResourceService',
    'UserService'
]
