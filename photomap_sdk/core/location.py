import asyncio
import logging

from pydantic import ValidationError

from photomap_sdk.core.errors import LocationError
from photomap_sdk.core.permissions import PermissionCoordinator
from photomap_sdk.core.schema import Capability, LocationErrorCode, LocationOptions, LocationSample
from photomap_sdk.core.timeutil import Clock, now_ms
from photomap_sdk.devices import LocationService

logger = logging.getLogger(__name__)


class LocationProvider:
    """Single-shot position resolution with timeout and staleness limits.

    Each request is tagged with a generation number. Starting a new request
    does not stop the one already in flight, but only the newest generation
    may update ``last_sample``/``last_error``, and callers still awaiting a
    superseded request receive the newest request's outcome instead.
    """

    def __init__(
        self,
        service: LocationService,
        permissions: PermissionCoordinator,
        options: LocationOptions | None = None,
        clock: Clock = now_ms,
    ):
        self.service = service
        self.permissions = permissions
        self.options = options or LocationOptions()
        self.clock = clock
        self.last_sample: LocationSample | None = None
        self.last_error: LocationError | None = None
        self._generation = 0
        self._latest: asyncio.Task | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def loading(self) -> bool:
        return self._latest is not None and not self._latest.done()

    async def get_current_location(self) -> LocationSample:
        self.permissions.require(Capability.LOCATION)
        self._generation += 1
        task = asyncio.ensure_future(self._resolve(self._generation))
        self._latest = task
        while True:
            try:
                sample = await task
            except LocationError:
                if task is self._latest:
                    raise
            else:
                if task is self._latest:
                    return sample
            task = self._latest

    async def retry(self) -> LocationSample:
        return await self.get_current_location()

    async def _resolve(self, generation: int) -> LocationSample:
        try:
            sample = await self._request_fix()
        except LocationError as exc:
            if generation == self._generation:
                self.last_error = exc
                logger.warning("location_failed gen=%d code=%s reason=%s", generation, exc.code.value, exc)
            else:
                logger.debug("location_superseded gen=%d code=%s", generation, exc.code.value)
            raise
        if generation == self._generation:
            self.last_sample = sample
            self.last_error = None
            logger.info(
                "location_fix gen=%d lat=%.6f lon=%.6f acc=%s",
                generation,
                sample.latitude,
                sample.longitude,
                sample.accuracy,
            )
        else:
            logger.debug("location_superseded gen=%d", generation)
        return sample

    async def _request_fix(self) -> LocationSample:
        timeout_ms = self.options.timeout_ms
        try:
            fix = await asyncio.wait_for(
                self.service.get_current_position(self.options),
                timeout=timeout_ms / 1000,
            )
        except asyncio.TimeoutError as exc:
            raise LocationError(
                LocationErrorCode.TIMEOUT, f"Location request timed out after {timeout_ms} ms"
            ) from exc
        except LocationError:
            raise
        except Exception as exc:
            raise LocationError(LocationErrorCode.POSITION_UNAVAILABLE, str(exc)) from exc

        age_ms = self.clock() - fix.timestamp
        if self.options.force_fresh_request and age_ms > self.options.maximum_age_ms:
            raise LocationError(
                LocationErrorCode.STALE,
                f"Position fix is {age_ms} ms old (maximum {self.options.maximum_age_ms} ms)",
            )
        try:
            return fix.to_sample()
        except ValidationError as exc:
            raise LocationError(LocationErrorCode.POSITION_UNAVAILABLE, "Position fix out of range") from exc
