import os
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import List
from contextlib import asynccontextmanager
from loguru import logger

from containers.priority_list import ItemNotFoundError, PriorityList


class ListConfig(BaseModel):
    list_id: str
    initial_capacity: int = Field(default=PriorityList.DEFAULT_CAPACITY, ge=1)


class AddItemRequest(BaseModel):
    # items are addressed later as a single path segment
    item: str = Field(min_length=1, pattern=r"^[^/]+$")
    priority: int


class ChangePriorityRequest(BaseModel):
    priority: int


class EntryModel(BaseModel):
    item: str
    priority: int


class ListSnapshot(BaseModel):
    list_id: str
    size: int
    capacity: int
    entries: List[EntryModel]
    text: str


class ItemResponse(BaseModel):
    list_id: str
    item: str


class PriorityResponse(BaseModel):
    list_id: str
    item: str
    priority: int


class ContainsResponse(BaseModel):
    list_id: str
    item: str
    found: bool


app_state = {
    "list_configs": {},
    "priority_lists": {}
}


def default_config():
    capacity = int(os.getenv("PRIORITY_LIST_INITIAL_CAPACITY", PriorityList.DEFAULT_CAPACITY))
    return {"initial_capacity": capacity}


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_state["list_configs"]["default"] = default_config()
    logger.info("Priority list service started with default config {}", app_state["list_configs"]["default"])

    yield

    app_state["priority_lists"].clear()


app = FastAPI(title="Priority List Service", lifespan=lifespan)


@app.exception_handler(ItemNotFoundError)
async def item_not_found_handler(request: Request, exc: ItemNotFoundError):
    logger.warning("{} {} -> 404: {}", request.method, request.url.path, exc)
    return JSONResponse(status_code=404, content={"detail": str(exc)})


def get_priority_list(list_id: str) -> PriorityList:
    if list_id not in app_state["priority_lists"]:
        configs = app_state["list_configs"]
        config = configs.get(list_id) or configs.get("default") or default_config()
        app_state["priority_lists"][list_id] = PriorityList(initial_capacity=config["initial_capacity"])
        logger.info("Created priority list {} with capacity {}", list_id, config["initial_capacity"])
    return app_state["priority_lists"][list_id]


def snapshot(list_id: str, plist: PriorityList) -> ListSnapshot:
    return ListSnapshot(
        list_id=list_id,
        size=plist.size(),
        capacity=plist.capacity,
        entries=[EntryModel(item=item, priority=priority) for item, priority in plist.entries()],
        text=str(plist)
    )


@app.put("/v1/list/config")
async def update_list_config(config: ListConfig):
    app_state["list_configs"][config.list_id] = {
        "initial_capacity": config.initial_capacity
    }
    logger.info("Config for list {} set to {}", config.list_id, app_state["list_configs"][config.list_id])

    return {
        "status": "updated",
        "list_id": config.list_id,
        "applied": config.list_id not in app_state["priority_lists"]
    }


@app.post("/v1/lists/{list_id}/items", response_model=ListSnapshot)
async def add_item(list_id: str, request: AddItemRequest):
    plist = get_priority_list(list_id)
    plist.add(request.item, request.priority)
    return snapshot(list_id, plist)


@app.get("/v1/lists/{list_id}", response_model=ListSnapshot)
async def get_list(list_id: str):
    return snapshot(list_id, get_priority_list(list_id))


@app.delete("/v1/lists/{list_id}", response_model=ListSnapshot)
async def clear_list(list_id: str):
    plist = get_priority_list(list_id)
    plist.clear()
    return snapshot(list_id, plist)


@app.get("/v1/lists/{list_id}/items/{item}", response_model=ContainsResponse)
async def contains_item(list_id: str, item: str):
    plist = get_priority_list(list_id)
    return ContainsResponse(list_id=list_id, item=item, found=plist.contains(item))


@app.delete("/v1/lists/{list_id}/items/{item}", response_model=ItemResponse)
async def remove_item(list_id: str, item: str):
    get_priority_list(list_id).remove(item)
    return ItemResponse(list_id=list_id, item=item)


@app.get("/v1/lists/{list_id}/items/{item}/priority", response_model=PriorityResponse)
async def get_item_priority(list_id: str, item: str):
    priority = get_priority_list(list_id).get_priority(item)
    return PriorityResponse(list_id=list_id, item=item, priority=priority)


@app.put("/v1/lists/{list_id}/items/{item}/priority", response_model=PriorityResponse)
async def change_item_priority(list_id: str, item: str, request: ChangePriorityRequest):
    get_priority_list(list_id).change_priority(item, request.priority)
    return PriorityResponse(list_id=list_id, item=item, priority=request.priority)


@app.get("/v1/lists/{list_id}/min", response_model=ItemResponse)
async def peek_min(list_id: str):
    return ItemResponse(list_id=list_id, item=get_priority_list(list_id).peek_min())


@app.get("/v1/lists/{list_id}/max", response_model=ItemResponse)
async def peek_max(list_id: str):
    return ItemResponse(list_id=list_id, item=get_priority_list(list_id).peek_max())


@app.post("/v1/lists/{list_id}/extract-min", response_model=ItemResponse)
async def extract_min(list_id: str):
    return ItemResponse(list_id=list_id, item=get_priority_list(list_id).extract_min())


@app.post("/v1/lists/{list_id}/extract-max", response_model=ItemResponse)
async def extract_max(list_id: str):
    return ItemResponse(list_id=list_id, item=get_priority_list(list_id).extract_max())


@app.get("/health")
async def health():
    return {"status": "healthy"}
