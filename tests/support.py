import asyncio


class ManualTransport:
    """Transport whose calls stay pending until the test settles them."""

    def __init__(self):
        self.calls = []

    def __call__(self, config):
        future = asyncio.get_running_loop().create_future()
        self.calls.append((config, future))
        return future

    @property
    def configs(self):
        return [config for config, _ in self.calls]

    def resolve(self, index, value):
        self.calls[index][1].set_result(value)

    def reject(self, index, exc):
        self.calls[index][1].set_exception(exc)


async def drain(rounds: int = 10) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)
