from fastapi import APIRouter, Request
from colorsaver.internal.jsonenchanced import EnhancedJSONEncoder
from colorsaver.dependencies import get_controller
from sse_starlette.sse import EventSourceResponse
from collections import defaultdict
import asyncio
import uuid
import json


STREAM_DELAY = 0.5  # second
RETRY_TIMEOUT = 15000  # millisecond

router = APIRouter(
    prefix="/api",
    tags=["sse_broadcast"]
)


broadcast_task = None
async def create_broadcast_task():
    global broadcast_task
    broadcast_task = asyncio.create_task(periodic_broadcast())

event_queues: defaultdict[str, set[asyncio.Queue]] = defaultdict(set)


def subscribe() -> asyncio.Queue:
    queue = asyncio.Queue()
    event_queues["all"].add(queue)
    return queue


async def broadcast_to_all(data: str):
    for queue in event_queues["all"]:
        await queue.put(data)


async def event_generator(request: Request, queue: asyncio.Queue):
    """Yields one `update` event per batch of saved/deleted colors."""
    try:
        while True:
            if await request.is_disconnected():
                print('[Broadcast] Client disconnected')
                break

            yield {
                "event": "update",
                "id": str(uuid.uuid4()),
                "retry": RETRY_TIMEOUT,
                "data": await queue.get()
            }
    finally:
        event_queues["all"].discard(queue)


@router.get('/stream')
async def message_stream(request: Request):
    return EventSourceResponse(event_generator(request, subscribe()))


def collect_changes() -> tuple[bool, str]:
    controller = get_controller()
    changes = controller.get_changes()
    if len(changes) > 0:
        controller.clear_changes()
        return True, json.dumps(changes, cls=EnhancedJSONEncoder)
    return False, ""


async def periodic_broadcast():
    while True:
        try:
            await asyncio.sleep(STREAM_DELAY)
            has_changes, new_data = collect_changes()
            if has_changes:
                await broadcast_to_all(new_data)
        except asyncio.CancelledError:
            break
        except Exception as e:
            print(f"[Broadcast] Broadcast error: {e}")
