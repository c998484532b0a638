"""Timing coroutines with @hemera."""

import asyncio

from hemera import hemera


@hemera
async def fetch_data() -> str:
    await asyncio.sleep(0.1)
    return "Data fetched successfully"


@hemera(name="AsyncOperation")
async def process_data(data: str) -> int:
    await asyncio.sleep(0.05)
    return len(data)


@hemera(threshold="30ms")
async def maybe_slow_async(ms: int) -> str:
    await asyncio.sleep(ms / 1000)
    return "Done"


@hemera(name="ComplexAsync", level="debug", threshold="10ms")
async def complex_async() -> int:
    await asyncio.sleep(0.025)
    return 42


async def main() -> None:
    print("1. Basic async function:")
    data = await fetch_data()
    print(f"   Result: {data}\n")

    print("2. Async with custom name:")
    print(f"   Length: {await process_data(data)}\n")

    print("3. Conditional async (20ms - should NOT log):")
    print(f"   Result: {await maybe_slow_async(20)}\n")

    print("4. Conditional async (50ms - SHOULD log):")
    print(f"   Result: {await maybe_slow_async(50)}\n")

    print("5. Complex async with all options:")
    print(f"   Result: {await complex_async()}")


if __name__ == "__main__":
    asyncio.run(main())
