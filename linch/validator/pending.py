import asyncio


class PendingWork:
    """Outstanding-work counter that signals once input is closed and nothing is left

    A link counts as pending from dispatch until it produces a terminal
    action or is dropped as a duplicate. Links waiting out a cooldown stay
    pending.
    """

    def __init__(self):
        self.count = 0
        self.closed = False
        self._idle = asyncio.Event()

    def add(self, n: int = 1):
        if self.closed:
            raise RuntimeError("cannot add work after input was closed")
        self.count += n

    def done(self):
        if self.count <= 0:
            raise RuntimeError("done() called more times than add()")
        self.count -= 1
        self._check()

    def close(self):
        """Mark that no new work will arrive"""
        self.closed = True
        self._check()

    def _check(self):
        if self.closed and self.count == 0:
            self._idle.set()

    async def wait(self):
        await self._idle.wait()
