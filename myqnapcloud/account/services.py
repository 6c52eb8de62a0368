# myqnapcloud/account/services.py

from typing import Any, Generic, Optional, Type, TypeVar, Union
import logging

from ..api.api_client import APIClient, APIResponse, ServiceConfig
from ..api.destinations import JSONDestination, RawDestination
from ..api.request_builder import RequestMethod
from ..api.transport import Transport
from .models import GetUserResponse

T = TypeVar('T')
logger = logging.getLogger(__name__)

class ResourceCall(Generic[T]):
    """
    One prepared call against a resource.

    ``result_type`` is a dataclass (or ``dict``/``list``) the JSON body is
    decoded into, or ``bytes`` to get the body unparsed.
    """

    def __init__(
        self,
        client: APIClient,
        method: Union[RequestMethod, str],
        path: str,
        result_type: Type[T],
        payload: Any = None
    ):
        self.client = client
        self.method = method
        self.path = path
        self.result_type = result_type
        self.payload = payload
        self.response: Optional[APIResponse] = None

    async def do(self) -> T:
        """Execute the call and return the decoded result"""
        if self.result_type is bytes:
            raw = RawDestination()
            self.response = await self.client.request(self.method, self.path, self.payload, raw)
            return raw.getvalue()

        destination = JSONDestination(self.result_type)
        self.response = await self.client.request(self.method, self.path, self.payload, destination)
        return destination.value

class ResourceService:
    """Calls under one resource root, e.g. ``me/avatar``"""

    root = ""

    def __init__(self, client: APIClient):
        self.client = client

    def path(self, sub_path: str = "") -> str:
        sub_path = sub_path.strip("/")
        return f"{self.root}/{sub_path}" if sub_path else self.root

    def call(
        self,
        method: Union[RequestMethod, str],
        sub_path: str = "",
        payload: Any = None,
        result_type: Type[T] = dict
    ) -> ResourceCall[T]:
        return ResourceCall(self.client, method, self.path(sub_path), result_type, payload)

class ActivityService(ResourceService):
    root = "me/activity"

class PasswordService(ResourceService):
    root = "me/password"

class AvatarService(ResourceService):
    root = "me/avatar"

class MeService(ResourceService):
    root = "me"

    def __init__(self, client: APIClient):
        super().__init__(client)
        self.activity = ActivityService(client)
        self.password = PasswordService(client)
        self.avatar = AvatarService(client)

    def get(self) -> ResourceCall[GetUserResponse]:
        """Profile of the user the transport is authenticated as"""
        return self.call(RequestMethod.GET, result_type=GetUserResponse)

class FriendService(ResourceService):
    root = "friend"

class UserService(ResourceService):
    root = "user"

class AccountService:
    """
    Entry point to the account API.

    Each instance wraps its own APIClient, so differently configured
    services can coexist in one process.

        async with AccountService.create(ServiceConfig(base_path=...), transport) as account:
            me = await account.me.get().do()
    """

    def __init__(self, client: APIClient):
        self.client = client
        self.me = MeService(client)
        self.friend = FriendService(client)
        self.user = UserService(client)

    @classmethod
    def create(
        cls,
        config: ServiceConfig,
        transport: Optional[Transport] = None
    ) -> "AccountService":
        """Build the APIClient and the service tree in one step"""
        logger.debug(f"Creating account service for {config.base_path} ({config.version})")
        return cls(APIClient(config, transport))

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "AccountService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
