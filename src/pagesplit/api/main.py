"""pagesplit API – FastAPI app entry point."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .upload import get_settings, router as upload_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # honour dependency overrides so startup and requests share directories
    settings = app.dependency_overrides.get(get_settings, get_settings)()
    settings.ensure_directories()
    yield


app = FastAPI(title="pagesplit", lifespan=lifespan)
app.include_router(upload_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(app=app, host="0.0.0.0", port=5000, reload=False)
