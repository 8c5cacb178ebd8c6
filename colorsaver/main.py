import argparse

import colorsaver.routers.router_broadcast as router_broadcast
import colorsaver.routers.router_colors as router_colors
from colorsaver.dependencies import get_controller
from colorsaver.internal.errors import PersistenceError
from colorama import Fore, init
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from contextlib import asynccontextmanager
init(autoreset=True)

@asynccontextmanager
async def lifespan(app: FastAPI):
    controller = get_controller()
    try:
        await controller.load()
    except PersistenceError as e:
        print(f"[Server] {Fore.YELLOW}|::| Couldn't load saved colors: {e}")
        print(f"[Server] {Fore.YELLOW}|::| Saving and deleting are disabled until the store is readable")
    await router_broadcast.create_broadcast_task()
    yield
    router_broadcast.broadcast_task.cancel()

server = FastAPI(lifespan=lifespan)

origins = [
    "http://localhost",
    "http://localhost:8080",
]

server.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


server.include_router(router_colors.router)
server.include_router(router_broadcast.router)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--host", type=str)
    parser.add_argument("--port", type=int)
    parser.add_argument("--hotreload", action="store_true")
    args = parser.parse_args()

    default_host = "127.0.0.1"
    default_port = 8080

    uvicorn.run("colorsaver.main:server", host=args.host or default_host, port=args.port or default_port, reload=args.hotreload)


if __name__ == "__main__":
    main()
