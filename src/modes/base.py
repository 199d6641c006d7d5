"""Base class for all puzzle modules."""
import itertools

from managers.scheduler_manager import SchedulerManager
from utilities.logger import ModuleLogger


class BaseModule:
    """
    Base class for all puzzle modules.

    A module is built inactive, is activated once by the host, and is then
    driven by its scheduler until it is solved. Each subclass defines a
    METADATA class attribute used by the manifest.

    METADATA Structure:
        id (str): Unique identifier for the module (e.g., "TWO_BITS")
        name (str): Human-readable name
        tag (str): Four character log tag
        settings (List[dict]): Tunable settings for the module
            Each setting dict must have:
                - key (str): Keyword argument accepted by the constructor
                - label (str): Short display label
                - default: Default value
    """

    METADATA = {
        "id": "UNKNOWN",
        "name": "Unknown Module",
        "tag": "MODU",
        "settings": []
    }

    _id_counter = itertools.count(1)

    def __init__(self, host, module_id=None, clock=None):
        self.host = host
        self.name = self.METADATA["name"]
        self.module_id = next(self._id_counter) if module_id is None else module_id
        self.unit_tag = f"#{self.module_id}"
        self.scheduler = SchedulerManager(clock=clock, unit=self.unit_tag)
        self.solved = False

    def log(self, level, msg):
        """Log a line tagged with this unit's id."""
        getattr(ModuleLogger, level)(self.METADATA.get("tag", "MODU"), msg, unit=self.unit_tag)

    def activate(self):
        """Override this method in subclasses."""
        raise NotImplementedError("Subclasses must implement the activate() method.")

    async def run(self, poll_interval=SchedulerManager.DEFAULT_POLL_INTERVAL):
        """Drive timed transitions until the module is solved."""
        await self.scheduler.run(poll_interval, until=lambda: self.solved)
        return "SOLVED"

    async def execute(self, poll_interval=SchedulerManager.DEFAULT_POLL_INTERVAL):
        """Activate, then run until solved."""
        try:
            self.activate()
            return await self.run(poll_interval)
        finally:
            self.scheduler.cancel()
