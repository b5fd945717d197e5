from contextlib import asynccontextmanager

from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse

from interest_account.config import settings
from interest_account.infrastructure.observability.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    yield


app = FastAPI(title="Mock Statistics Server", version="1.0.0", lifespan=lifespan)

# Users the API will "create" on POST. Income is monthly, in pence.
NEW_USERS = {
    "332705c0-fadd-4663-ace4-6ea1c3297566": 20000,
    "3567bd11-03c5-44ad-ae5d-5021ac26d210": 600000,
    "e0c1c412-823e-4af8-b256-2d1c22b3b376": None,
    "3d676dc7-ed2c-447c-8eb9-8cd8c5e86279": 999999,
}

# Users that already exist: POST fails, GET finds them
EXISTING_USERS = {
    "46437aa0-2386-4c90-b789-8513a47fda27": 20000,
}


def error(code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=code, content={"code": code, "message": message})


@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/users")
def create_user(user_id: str = Body(...)):
    if user_id in EXISTING_USERS:
        return error(409, "User Account exists.")
    return {"id": user_id, "income": NEW_USERS.get(user_id)}

@app.get("/users/{user_id}")
def get_user(user_id: str):
    if user_id not in EXISTING_USERS:
        return error(404, "Account not found")
    return {"id": user_id, "income": EXISTING_USERS[user_id]}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
