import logging
from typing import Callable

from photomap_sdk.core.errors import PermissionDeniedError
from photomap_sdk.core.schema import Capability, Notice, NoticeAction, PermissionStatus
from photomap_sdk.devices import PermissionBackend

logger = logging.getLogger(__name__)

Notifier = Callable[[Notice], None]

REQUESTABLE = (PermissionStatus.UNKNOWN, PermissionStatus.DENIED)

RATIONALE = {
    Capability.CAMERA: Notice(
        title="Camera Permission",
        message="Camera access is required to take pictures.",
    ),
    Capability.LOCATION: Notice(
        title="Location Permission",
        message="Location access is required to tag photos with their position.",
    ),
}

CAMERA_SETTINGS_NOTICE = Notice(
    title="Camera Permission",
    message="Camera access is required to take pictures.",
    actions=(NoticeAction.CANCEL, NoticeAction.OPEN_SETTINGS),
)

DENIED_NOTICES = {
    Capability.CAMERA: CAMERA_SETTINGS_NOTICE,
    Capability.LOCATION: Notice(
        title="Location Permission Denied",
        message="Cannot get location without permission.",
        actions=(NoticeAction.RETRY,),
    ),
}

BLOCKED_NOTICES = {
    Capability.CAMERA: CAMERA_SETTINGS_NOTICE,
    Capability.LOCATION: Notice(
        title="Location Permission",
        message="Please enable location access in settings.",
        actions=(NoticeAction.CANCEL, NoticeAction.OPEN_SETTINGS),
    ),
}

UNAVAILABLE_NOTICE = Notice(
    title="Permission Error",
    message="This device does not support the requested capability.",
)


def discard_notice(notice: Notice) -> None:
    pass


class PermissionCoordinator:
    """Tracks camera and location authorization and gates the components that need them.

    ``resolve`` asks the OS only while the status is still requestable; a
    ``blocked`` capability is reported with a settings-only prompt and is never
    re-requested until the user changes it outside the app.
    """

    def __init__(self, backend: PermissionBackend, notify: Notifier | None = None):
        self.backend = backend
        self.notify = notify or discard_notice
        self.statuses = {cap: PermissionStatus.UNKNOWN for cap in Capability}

    async def resolve(self, capability: Capability) -> PermissionStatus:
        status = await self.backend.check(capability)
        if status in REQUESTABLE:
            self.notify(RATIONALE[capability])
            status = await self.backend.request(capability)
        self.statuses[capability] = status
        logger.info("permission capability=%s status=%s", capability.value, status.value)
        if status == PermissionStatus.BLOCKED:
            self.notify(BLOCKED_NOTICES[capability])
        elif status == PermissionStatus.DENIED:
            self.notify(DENIED_NOTICES[capability])
        elif status == PermissionStatus.UNAVAILABLE:
            self.notify(UNAVAILABLE_NOTICE)
        return status

    async def resolve_all(self) -> dict[Capability, PermissionStatus]:
        for capability in Capability:
            await self.resolve(capability)
        return dict(self.statuses)

    def status(self, capability: Capability) -> PermissionStatus:
        return self.statuses[capability]

    def is_granted(self, capability: Capability) -> bool:
        return self.statuses[capability] == PermissionStatus.GRANTED

    def require(self, capability: Capability) -> None:
        if not self.is_granted(capability):
            raise PermissionDeniedError(capability, self.statuses[capability])

    async def open_settings(self) -> None:
        await self.backend.open_settings()
